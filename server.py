"""
FastMCP Server implementation for the Hacktoberfest Showcase.
Exposes the search controls (tags, sort order, pagination) as tools.
"""

from fastmcp import FastMCP
from config import get_tags, logger
from github_client import SortOrder
from search_controller import SearchController
from render import render_page

SYSTEM_PROMPT = """
You help users browse popular GitHub repositories tagged 'hacktoberfest'.
Use the tools to filter by tags, change the star sort order and page through results.
Only tags returned by 'list_tags' are offered by the showcase.
"""

# Initialize FastMCP Server
mcp = FastMCP("HacktoberfestShowcase", instructions=SYSTEM_PROMPT)

# One controller per server process: the browsing session
_controller = None


def get_controller():
    """Returns the session controller, creating and loading it on first use."""
    global _controller
    if _controller is None:
        _controller = SearchController()
        _controller.refresh()
    return _controller


def reset_controller(controller=None):
    """Replaces the session controller (None starts a fresh session on next use)."""
    global _controller
    _controller = controller


def _show(controller):
    return render_page(controller.state, controller.route)


# Core implementation functions (testable without FastMCP decorator)
def _list_tags_impl() -> str:
    try:
        controller = get_controller()
        selected = set(controller.state.selected_tags)
        lines = [f"{'[x]' if tag in selected else '[ ]'} {tag}" for tag in get_tags()]
        return "\n".join(lines)
    except Exception as e:
        logger.error(f"Error in list_tags_tool: {str(e)}")
        return f"Error in list_tags_tool: {str(e)}"


def _toggle_tag_impl(tag: str) -> str:
    """
    Selects the tag if it is not selected, deselects it otherwise.

    Args:
        tag: One of the tags from list_tags (e.g., 'react').
    """
    tag = tag.strip()
    if tag not in get_tags():
        return f"Error: Unknown tag '{tag}'. Available tags: {', '.join(get_tags())}"
    try:
        controller = get_controller()
        controller.toggle_tag(tag)
        logger.info(f"Toggled tag {tag}. Selected: {list(controller.state.selected_tags)}")
        return _show(controller)
    except Exception as e:
        logger.error(f"Error in toggle_tag_tool: {str(e)}")
        return f"Error in toggle_tag_tool: {str(e)}"


def _next_page_impl() -> str:
    try:
        controller = get_controller()
        controller.next_page()
        return _show(controller)
    except Exception as e:
        logger.error(f"Error in next_page_tool: {str(e)}")
        return f"Error in next_page_tool: {str(e)}"


def _previous_page_impl() -> str:
    try:
        controller = get_controller()
        controller.prev_page()
        return _show(controller)
    except Exception as e:
        logger.error(f"Error in previous_page_tool: {str(e)}")
        return f"Error in previous_page_tool: {str(e)}"


def _set_sort_order_impl(order: str) -> str:
    """
    Args:
        order: 'asc'/'ascending' or 'desc'/'descending'.
    """
    try:
        order = SortOrder.parse(order)
    except ValueError as e:
        return f"Error: {e}. Use 'asc' or 'desc'."
    try:
        controller = get_controller()
        controller.set_sort_order(order)
        return _show(controller)
    except Exception as e:
        logger.error(f"Error in set_sort_order_tool: {str(e)}")
        return f"Error in set_sort_order_tool: {str(e)}"


def _show_repositories_impl() -> str:
    try:
        return _show(get_controller())
    except Exception as e:
        logger.error(f"Error in show_repositories_tool: {str(e)}")
        return f"Error in show_repositories_tool: {str(e)}"


# FastMCP decorated functions (wrappers around implementation)
@mcp.tool(name="list_tags")
def list_tags_tool() -> str:
    """List the tags available for filtering, marking the selected ones."""
    return _list_tags_impl()


@mcp.tool(name="toggle_tag")
def toggle_tag_tool(tag: str) -> str:
    """
    Select or deselect a tag filter and show the refreshed results.

    Args:
        tag: One of the tags from list_tags (e.g., 'react').
    """
    return _toggle_tag_impl(tag)


@mcp.tool(name="next_page")
def next_page_tool() -> str:
    """Go to the next page of results."""
    return _next_page_impl()


@mcp.tool(name="previous_page")
def previous_page_tool() -> str:
    """Go to the previous page of results. Does nothing on the first page."""
    return _previous_page_impl()


@mcp.tool(name="set_sort_order")
def set_sort_order_tool(order: str) -> str:
    """
    Sort results by star count.

    Args:
        order: 'asc' for fewest stars first, 'desc' for most stars first.
    """
    return _set_sort_order_impl(order)


@mcp.tool(name="show_repositories")
def show_repositories_tool() -> str:
    """Show the current page of repositories."""
    return _show_repositories_impl()


def run():
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    run()
