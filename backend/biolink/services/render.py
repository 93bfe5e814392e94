"""
Server-side HTML for the public profile page and the dashboard.

Link targets are validated as http(s) on write, every other value is
escaped here.
"""

from html import escape
from typing import Iterable, List, Sequence, Tuple

from ..config import settings
from ..core.themes import get_theme
from ..core.ordering import UNGROUPED, bucket_links

# Fire-and-forget click tracking, the link opens through its own target="_blank"
TRACK_SCRIPT = """
<script>
function trackClick(el) {
  try {
    fetch('/api/track-click', {
      method: 'POST',
      headers: {'Content-Type': 'application/json'},
      body: JSON.stringify({linkId: el.dataset.linkId}),
      keepalive: true
    }).catch(function (error) { console.error('Error tracking click:', error); });
  } catch (error) {
    console.error('Error tracking click:', error);
  }
  return true;
}
</script>
"""


def get_404_page() -> str:
    """404 page for unknown and private profiles"""
    return f"""
    <!DOCTYPE html>
    <html><head><meta charset="UTF-8"><title>Profile Not Found</title></head>
    <body style="font-family: Arial; text-align: center; padding: 50px;">
        <h1>404 - Profile Not Found</h1>
        <p>This page does not exist or is not public.</p>
        <a href="/" style="color: #8b5cf6;">Go to {escape(settings.APP_NAME)}</a>
    </body></html>
    """


def page_title(profile) -> str:
    return f"{profile.display_name or profile.username} - {settings.APP_NAME}"


def page_description(profile) -> str:
    return profile.bio or f"Check out {profile.display_name or profile.username}'s links"


def group_public_links(links: Sequence, collections: Sequence) -> Tuple[List, List[Tuple[object, List]]]:
    """
    Split active links into the ungrouped list and per-collection groups.

    Collections without visible links are left out. Links that point at a
    collection which is not shown are not shown either.
    """
    ungrouped = bucket_links(links, None)
    groups = []
    for collection in sorted(collections, key=lambda c: c.position):
        members = bucket_links(links, collection.id)
        if members:
            groups.append((collection, members))
    return ungrouped, groups


def _link_button(link, theme) -> str:
    return (
        f'<a class="link" href="{escape(link.url)}" target="_blank" rel="noopener noreferrer" '
        f'data-link-id="{escape(link.id)}" onclick="return trackClick(this)" '
        f'style="background:{theme.button_color};color:{theme.button_text_color};">'
        f'{escape(link.title)}</a>'
    )


def render_public_profile(profile, links: Sequence, collections: Sequence) -> str:
    """Render the read-only public profile page"""
    theme = get_theme(profile.theme)
    name = profile.display_name or f"@{profile.username}"
    initial = (profile.display_name or profile.username or "U")[0].upper()
    ungrouped, groups = group_public_links(links, collections)

    if profile.avatar_url:
        avatar = f'<img class="avatar" src="{escape(profile.avatar_url)}" alt="{escape(name)}">'
    else:
        avatar = (
            f'<div class="avatar" style="background:{theme.button_color};'
            f'color:{theme.button_text_color};">{escape(initial)}</div>'
        )

    sections = []
    for collection, members in groups:
        buttons = "\n".join(_link_button(link, theme) for link in members)
        sections.append(
            f'<details class="collection" open><summary>{escape(collection.title)}</summary>'
            f'{buttons}</details>'
        )
    sections.extend(_link_button(link, theme) for link in ungrouped)

    bio = f'<p class="bio">{escape(profile.bio)}</p>' if profile.bio else ""
    body = "\n".join(sections) if sections else '<p class="empty">No links yet.</p>'

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{escape(page_title(profile))}</title>
    <meta name="description" content="{escape(page_description(profile))}">
    <style>
        body {{ font-family: Arial, sans-serif; margin: 0; padding: 40px 16px;
               background: {theme.background_color}; color: {theme.text_color}; }}
        main {{ max-width: 480px; margin: 0 auto; text-align: center; }}
        .avatar {{ width: 96px; height: 96px; border-radius: 50%; margin: 0 auto 16px;
                   display: flex; align-items: center; justify-content: center; font-size: 40px; }}
        .link {{ display: block; padding: 14px; margin: 12px 0; border-radius: 999px;
                 text-decoration: none; font-weight: bold; }}
        .collection summary {{ cursor: pointer; font-weight: bold; margin-top: 16px; }}
    </style>
</head>
<body>
<main>
    {avatar}
    <h1>{escape(name)}</h1>
    {bio}
    {body}
</main>
{TRACK_SCRIPT}
</body>
</html>"""


def _dashboard_link(link) -> str:
    state = "" if link.is_active else " (hidden)"
    return (
        f'<li data-id="{escape(link.id)}" data-position="{link.position}">'
        f'{escape(link.title)}{state} <small>{escape(link.url)}</small> '
        f'<span class="clicks">{link.click_count} clicks</span></li>'
    )


def _dashboard_list(links: Iterable) -> str:
    items = "\n".join(_dashboard_link(link) for link in links)
    return f"<ol>{items}</ol>" if items else '<p class="empty">Drop links here or add new ones</p>'


def render_dashboard(profile, board) -> str:
    """Render the owner's board: collections first, then the ungrouped links"""
    sections = []
    for collection in sorted(board.collections, key=lambda c: c.position):
        members = bucket_links(board.links, collection.id)
        sections.append(
            f'<section class="collection" data-id="{escape(collection.id)}">'
            f'<h2>{escape(collection.title)} <small>{len(members)} links</small></h2>'
            f'{_dashboard_list(members)}</section>'
        )
    sections.append(
        f'<section class="ungrouped" data-id="{UNGROUPED}"><h2>Links</h2>'
        f'{_dashboard_list(bucket_links(board.links, None))}</section>'
    )

    public_url = f"{settings.BASE_URL}/{profile.username}"
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>Dashboard - {escape(settings.APP_NAME)}</title>
</head>
<body style="font-family: Arial, sans-serif;">
    <header>
        <h1>{escape(profile.display_name or profile.username)}</h1>
        <a href="/{escape(profile.username)}" target="_blank" rel="noopener noreferrer">{escape(public_url)}</a>
    </header>
    {"".join(sections)}
</body>
</html>"""


def render_auth_page() -> str:
    """Placeholder sign-in page, sessions come from the identity provider"""
    return f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>Sign in - {escape(settings.APP_NAME)}</title></head>
<body style="font-family: Arial; text-align: center; padding: 50px;">
    <h1>Sign in</h1>
    <p>Sign in with your identity provider to manage your links.</p>
    <a href="/dashboard">Continue to dashboard</a>
</body></html>"""
