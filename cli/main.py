"""CLI entry point and argument parsing"""

import argparse
import asyncio
import logging
import sys
import threading
import webbrowser

from rich.console import Console

from spotify_oauth.errors import AuthRefreshError, SpotifyAuthError, UnauthenticatedError
from cli.status_display import get_auth_status, show_token_status
from cli.track_display import show_top_tracks


console = Console()


def cmd_serve(args) -> int:
    """Run the local page, optionally opening the login in a browser"""
    from web.server import WebServer

    server = WebServer(debug=args.debug, bind_address=args.bind, port=args.port)
    console.print(f"[green]✓ Serving on {server.base_url}/[/green]")
    console.print("[dim]Register this URL as Redirect URI in the Spotify dashboard[/dim]")

    if args.open:
        # the server must be accepting connections before the browser arrives
        threading.Timer(1.0, webbrowser.open, args=(f"{server.base_url}/login",)).start()

    server.run()
    return 0


def cmd_status(args) -> int:
    """Show the stored session"""
    from web.dependencies import build_controller

    storage = build_controller().token_manager.storage
    auth_status, detail = get_auth_status(storage)
    style = {"VALID": "green", "EXPIRED": "yellow"}.get(auth_status, "red")
    console.print(f"Spotify Auth: [{style}]{auth_status}[/{style}] ({detail})")
    show_token_status(storage, console)
    return 0


async def _load_top_tracks(controller):
    profile = await controller.api_client.get_profile()
    tracks = await controller.api_client.get_top_tracks(controller.time_range, controller.limit)
    return profile, tracks


def cmd_top(args) -> int:
    """Print the top tracks using the stored session"""
    from web.dependencies import build_controller

    controller = build_controller()
    if args.limit:
        controller.limit = args.limit

    try:
        profile, tracks = asyncio.run(_load_top_tracks(controller))
    except (UnauthenticatedError, AuthRefreshError) as e:
        console.print(f"[red]✗ {e}[/red]")
        console.print("Log in first: spotify-top serve --open")
        return 1
    except SpotifyAuthError as e:
        console.print(f"[red]✗ {e}[/red]")
        return 1

    show_top_tracks(profile, tracks, console)
    return 0


def cmd_logout(args) -> int:
    """Forget the stored session"""
    from web.dependencies import build_controller

    build_controller().logout()
    console.print("[green]✓ Logged out[/green]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Spotify top tracks client")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.set_defaults(func=cmd_serve, bind=None, port=None, open=False)
    subparsers = parser.add_subparsers(dest="command")

    serve = subparsers.add_parser("serve", help="Run the local page (default)")
    serve.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    serve.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")
    serve.add_argument("--open", action="store_true", help="Open the login page in a browser")
    serve.set_defaults(func=cmd_serve)

    status = subparsers.add_parser("status", help="Show the stored session")
    status.set_defaults(func=cmd_status)

    top = subparsers.add_parser("top", help="Print your top tracks")
    top.add_argument("--limit", "-n", type=int, default=None, help="Number of tracks (default: from config)")
    top.set_defaults(func=cmd_top)

    logout = subparsers.add_parser("logout", help="Clear the stored session")
    logout.set_defaults(func=cmd_logout)

    return parser


def main(argv=None):
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.debug:
        logging.basicConfig(level=logging.WARNING, format='%(levelname)s - %(name)s - %(message)s')
    elif args.func is not cmd_serve:
        # serve configures debug logging itself through WebServer
        from web.server import setup_debug_logging
        setup_debug_logging()

    try:
        exit_code = args.func(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
        exit_code = 0
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
