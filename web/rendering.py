"""
HTML rendering of the session view state.
"""
import json
from html import escape
from typing import Optional

from session.controller import SessionController

PAGE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Your top tracks</title>
  <style>
    body {{ margin: 0; background: #121212; color: #fff; font-family: Inter, system-ui, -apple-system, "Segoe UI", Roboto, Arial, sans-serif; }}
    header {{ position: sticky; top: 0; background: #121212; border-bottom: 1px solid #262626; }}
    .bar, main {{ max-width: 64rem; margin: 0 auto; padding: 1rem; }}
    .bar {{ display: flex; align-items: center; justify-content: space-between; }}
    .brand {{ font-weight: 600; font-size: 1.1rem; }}
    .user {{ display: flex; align-items: center; gap: .75rem; }}
    .avatar {{ width: 2rem; height: 2rem; border-radius: 50%; background: #404040; }}
    .button {{ background: #1DB954; color: #121212; border: 0; border-radius: 999px; padding: .5rem 1rem; font-weight: 600; text-decoration: none; cursor: pointer; }}
    .hero {{ margin-top: 4rem; text-align: center; }}
    .error {{ color: #f87171; background: rgba(127, 29, 29, .2); border: 1px solid #991b1b; padding: .5rem .75rem; border-radius: .25rem; margin-bottom: 1rem; }}
    .loading {{ color: #a3a3a3; }}
    ol {{ list-style: none; padding: 0; }}
    li {{ display: flex; align-items: center; gap: 1rem; padding: .75rem; border-radius: .5rem; }}
    li:hover {{ background: rgba(38, 38, 38, .6); }}
    .rank {{ width: 2rem; color: #a3a3a3; font-weight: 600; font-variant-numeric: tabular-nums; }}
    .cover {{ width: 3.5rem; height: 3.5rem; border-radius: .25rem; }}
    .meta {{ flex: 1; min-width: 0; }}
    .title, .artists {{ white-space: nowrap; overflow: hidden; text-overflow: ellipsis; }}
    .artists, .duration {{ color: #a3a3a3; font-size: .875rem; }}
    .no-preview {{ color: #737373; font-size: .75rem; }}
    footer {{ padding: 2.5rem 0; text-align: center; font-size: .75rem; color: #737373; }}
  </style>
</head>
<body>
  <header><div class="bar"><span class="brand">Your top of the month</span>{account}</div></header>
  <main>{content}</main>
  <footer>Unofficial app. Style inspired by Spotify.</footer>
  {script}
</body>
</html>
"""


def _account_html(controller: SessionController) -> str:
    profile = controller.profile
    if not profile:
        return '<a class="button" href="/login">Log in with Spotify</a>'

    if profile.avatar_url:
        avatar = f'<img class="avatar" src="{escape(profile.avatar_url)}" alt="avatar">'
    else:
        avatar = '<div class="avatar"></div>'
    return (
        f'<div class="user">{avatar}<span>{escape(profile.display_name or "")}</span>'
        '<form method="post" action="/logout"><button class="button" type="submit">Log out</button></form></div>'
    )


def _tracks_html(controller: SessionController) -> str:
    rows = []
    for index, track in enumerate(controller.tracks, start=1):
        cover = track.thumbnail_url
        cover_html = f'<img class="cover" src="{escape(cover)}" alt="{escape(track.name)}">' if cover else '<div class="cover"></div>'
        if track.preview_url:
            preview = f'<audio controls src="{escape(track.preview_url)}"></audio>'
        else:
            preview = '<span class="no-preview">no preview</span>'
        rows.append(
            f'<li><div class="rank">{index}</div>{cover_html}'
            f'<div class="meta"><div class="title">{escape(track.name)}</div>'
            f'<div class="artists">{escape(track.artist_names)}</div></div>'
            f'<div class="duration">{track.duration_label}</div>{preview}</li>'
        )
    return "<ol>" + "".join(rows) + "</ol>"


def render_page(controller: SessionController, replaced_url: Optional[str] = None) -> str:
    """Render the whole page for the controller's current state

    Args:
        controller: Session controller holding the view state
        replaced_url: URL to put in the address bar via history.replaceState
    """
    error_html = f'<div class="error">{escape(controller.error)}</div>' if controller.error else ""

    if controller.profile:
        loading = '<div class="loading">Loading…</div>' if controller.loading else ""
        content = (
            f"<section><h2>Top {len(controller.tracks)} tracks · last month</h2>"
            f"{loading}{error_html}{_tracks_html(controller)}</section>"
        )
    else:
        content = (
            '<div class="hero"><h1>Hi there!</h1>'
            f"{error_html}"
            "<p>Log in with Spotify and I will show your 10 most played tracks of the last month.</p>"
            '<a class="button" href="/login">Log in with Spotify</a></div>'
        )

    script = ""
    if replaced_url:
        target = json.dumps(replaced_url).replace("</", "<\\/")
        script = f"<script>window.history.replaceState({{}}, document.title, {target});</script>"

    return PAGE_TEMPLATE.format(account=_account_html(controller), content=content, script=script)
