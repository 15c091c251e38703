"""
Plain-text rendering of the search state for the terminal UI and the MCP tools.
"""

from config import get_tags
from github_client import SortOrder

SEARCHING_MESSAGE = "Searching for Repositories..."
EMPTY_MESSAGE = "No repositories found."


def render_card(repo):
    desc = repo.description or ""
    return "\n".join([
        f"[{repo.owner_avatar_url}]",
        repo.name,
        f"   {desc}",
        f"   Stars: {repo.star_count}",
        f"   Open Issues: {repo.open_issue_count}",
        f"   Visit Repository: {repo.html_url}",
    ])


def render_tag_bar(state):
    # Selected tags are marked with an asterisk
    buttons = [f"*{tag}*" if tag in state.selected_tags else tag for tag in get_tags()]
    return "Filter by Tags: " + " | ".join(buttons)


def render_sort(state):
    label = "Ascending" if state.sort_order is SortOrder.ASCENDING else "Descending"
    return f"Sort by Stars: {label}"


def render_results(state):
    if state.results:
        return ("\n" + "-" * 30 + "\n").join(render_card(repo) for repo in state.results)
    return SEARCHING_MESSAGE if state.loading else EMPTY_MESSAGE


def render_pagination(state, route=None):
    controls = []
    if state.current_page > 1:
        controls.append("[Previous]")
    controls.append("[Loading...]" if state.loading else "[Next]")
    line = " ".join(controls)
    if route:
        line += f"   {route}"
    return line


def render_page(state, route=None):
    """Renders the whole showcase: header, filters, results and pagination."""
    return "\n".join([
        "=== GitHub Hacktoberfest Showcase ===",
        render_tag_bar(state),
        render_sort(state),
        "",
        "--- Repositories with Hacktoberfest Tag ---",
        render_results(state),
        "",
        render_pagination(state, route),
    ])
