from unittest.mock import Mock, patch

import pytest

import server
from github_client import FetchFailure, Repository
from search_controller import SearchController
from server import (
    _list_tags_impl,
    _next_page_impl,
    _previous_page_impl,
    _set_sort_order_impl,
    _show_repositories_impl,
    _toggle_tag_impl,
)


REPO = Repository(
    id=7,
    name="awesome-project",
    description="A test repository",
    star_count=4200,
    open_issue_count=3,
    html_url="https://github.com/owner/awesome-project",
    owner_avatar_url="https://avatars.githubusercontent.com/u/7",
)


@pytest.fixture
def fetcher():
    mock_fetcher = Mock(return_value=[REPO])
    server.reset_controller(SearchController(fetcher=mock_fetcher, token="dummy"))
    yield mock_fetcher
    server.reset_controller()


def test_toggle_tag_tool_returns_rendered_page(fetcher):
    output = _toggle_tag_impl("react")

    fetcher.assert_called_once_with(["react"], 1, server.get_controller().state.sort_order, "dummy")
    assert "awesome-project" in output
    assert "Stars: 4200" in output
    assert "*react*" in output


def test_toggle_tag_tool_rejects_unknown_tag(fetcher):
    output = _toggle_tag_impl("cobol")

    assert "Error: Unknown tag 'cobol'" in output
    fetcher.assert_not_called()


def test_list_tags_marks_selected(fetcher):
    _toggle_tag_impl("css")
    output = _list_tags_impl()

    assert "[x] css" in output
    assert "[ ] react" in output


def test_pagination_tools_update_route(fetcher):
    assert "/page/2" in _next_page_impl()
    assert "/page/1" in _previous_page_impl()
    # Already on the first page
    output = _previous_page_impl()
    assert "/page/1" in output
    assert "[Previous]" not in output
    assert fetcher.call_count == 2


def test_set_sort_order_tool(fetcher):
    assert "Sort by Stars: Ascending" in _set_sort_order_impl("asc")
    assert "Error: Unknown sort order" in _set_sort_order_impl("random")


def test_show_repositories_keeps_results_after_failure(fetcher):
    server.get_controller().refresh()
    fetcher.side_effect = FetchFailure("GitHub API Error: 502")

    output = _next_page_impl()

    assert "awesome-project" in output
    assert "[Next]" in output


@patch("server.SearchController")
def test_get_controller_creates_and_loads_session_once(mock_controller_cls):
    server.reset_controller()
    try:
        first = server.get_controller()
        second = server.get_controller()
    finally:
        server.reset_controller()

    assert first is second
    mock_controller_cls.assert_called_once_with()
    first.refresh.assert_called_once_with()


def test_show_repositories_before_any_results(fetcher):
    fetcher.return_value = []
    output = _show_repositories_impl()
    assert "No repositories found." in output


@pytest.mark.parametrize("impl, tool_name", [
    (_list_tags_impl, "list_tags_tool"),
    (_show_repositories_impl, "show_repositories_tool"),
    (lambda: _set_sort_order_impl("asc"), "set_sort_order_tool"),
])
@patch("server.get_controller")
def test_tools_report_session_errors(mock_get_controller, impl, tool_name):
    mock_get_controller.side_effect = RuntimeError("session failed")

    assert impl() == f"Error in {tool_name}: session failed"
