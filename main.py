from config import get_tags
from github_client import SortOrder
from search_controller import SearchController
from render import render_page

HELP = """Commands:
  t <tag>       toggle a tag filter
  n             next page
  p             previous page
  s asc|desc    sort by stars
  r             reload the current page
  q             quit"""


def handle_command(controller, command):
    """Applies one command line to the controller. Returns False to quit."""
    parts = command.strip().split(maxsplit=1)
    if not parts:
        return True
    action = parts[0].lower()
    arg = parts[1].strip() if len(parts) > 1 else ""

    if action in ("q", "quit", "exit"):
        return False
    if action == "t":
        if arg not in get_tags():
            print(f"Unknown tag '{arg}'. Available: {', '.join(get_tags())}")
        else:
            controller.toggle_tag(arg)
    elif action == "n":
        controller.next_page()
    elif action == "p":
        if controller.state.current_page <= 1:
            print("Already on the first page.")
        controller.prev_page()
    elif action == "s":
        try:
            order = SortOrder.parse(arg)
        except ValueError:
            print("Sort order must be 'asc' or 'desc'.")
        else:
            if order is controller.state.sort_order:
                print(f"Already sorted {order.name.lower()}.")
            controller.set_sort_order(order)
    elif action == "r":
        controller.refresh()
    else:
        print(HELP)
    return True


def main():
    controller = SearchController()
    # Re-render whenever a request settles
    controller.subscribe(
        lambda state: None if state.loading else print("\n" + render_page(state, controller.route))
    )

    print(HELP)
    controller.refresh()

    while True:
        try:
            command = input("\n> ")
        except EOFError:
            break
        if not handle_command(controller, command):
            break


if __name__ == "__main__":
    main()
