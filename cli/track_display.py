"""Top tracks display for CLI"""

from typing import List, Optional

from rich.table import Table

from spotify_api.models import Profile, Track


def show_top_tracks(profile: Optional[Profile], tracks: List[Track], console):
    """
    Print the profile header and the ranked track list

    Args:
        profile: Current user's profile
        tracks: Top tracks, most played first
        console: Rich console for output
    """
    if profile and profile.display_name:
        console.print(f"[bold green]{profile.display_name}[/bold green]")

    table = Table(title=f"Top {len(tracks)} tracks · last month")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Artists")
    table.add_column("Duration", justify="right")
    table.add_column("Preview", style="dim")

    for index, track in enumerate(tracks, start=1):
        table.add_row(
            str(index),
            track.name,
            track.artist_names,
            track.duration_label,
            track.preview_url or "no preview",
        )

    console.print(table)
