"""Status display functionality for CLI"""

from rich.table import Table
from utils.storage import FileSessionStore, TokenStorage


def show_token_status(storage: TokenStorage, console):
    """
    Display detailed token status

    Args:
        storage: TokenStorage instance
        console: Rich console for output
    """
    status = storage.get_status()

    table = Table(title="Spotify Session")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Has Tokens", "Yes" if status["has_tokens"] else "No")
    table.add_row("Has Refresh Token", "Yes" if status["has_refresh_token"] else "No")
    table.add_row("Is Expired", "Yes" if status["is_expired"] else "No")

    if status["expires_at"]:
        table.add_row("Expires At", status["expires_at"])
        table.add_row("Time Until Expiry", status["time_until_expiry"])

    if isinstance(storage.store, FileSessionStore):
        table.add_row("Session File", str(storage.store.session_file))

    console.print(table)


def get_auth_status(storage: TokenStorage) -> tuple[str, str]:
    """
    Get authentication status and expiry info

    Args:
        storage: TokenStorage instance

    Returns:
        Tuple of (status, detail_message)
    """
    status = storage.get_status()

    if not status["has_tokens"]:
        return "NO AUTH", "No tokens available"

    if status["is_expired"]:
        if status["has_refresh_token"]:
            return "EXPIRED", "Access token expired, will refresh on next request"
        return "EXPIRED", "Access token expired and no refresh token, please log in again"

    return "VALID", f"Expires in {status['time_until_expiry']}"
