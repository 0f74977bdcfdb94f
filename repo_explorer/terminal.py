# repo_explorer/terminal.py
from repo_explorer.explorer import ExplorerSession
from repo_explorer.models import SearchFilters
from repo_explorer.render import card_description, card_label, rate_limit_line, status_line

HELP = """Commands:
  <field>=<value>   set a filter, e.g. language=python or topics=ml,vision
  search            run the search (re-sorts cached results when only sort/order changed)
  show              print the current filters
  clear             reset filters and forget cached results
  quit / exit       leave"""


def print_results(session: ExplorerSession, limit: int = 20):
    state = session.state
    for line in (status_line(state), rate_limit_line(state)):
        if line:
            print(line)

    if state.error:
        print(f"\nError: {state.error}")
        return

    if not state.results:
        print("\nNo results found. Try adjusting your search criteria.")
        return

    cached = " • Using cached data" if state.from_cache else ""
    print(f"\nFound {state.total_count} repositories{cached}")
    for repo in state.results[:limit]:
        label = card_label(repo)
        print(f"\n   {repo.full_name}" + (f"  [{label}]" if label else ""))
        print(f"   {card_description(repo)}")
        print(f"   🔗 {repo.html_url}")
    if len(state.results) > limit:
        print(f"\n... and {len(state.results) - limit} more")


def handle_command(session: ExplorerSession, command: str) -> bool:
    """Applies one command. Returns False when the user wants to leave."""
    if command.lower() in ["quit", "exit"]:
        return False

    if command == "search":
        print("Searching...")
        session.search()
        print_results(session)
    elif command == "clear":
        session.clear()
        print("Filters and cached results cleared.")
    elif command == "show":
        for name, value in session.filters.to_dict().items():
            print(f"   {name} = {value!r}")
    elif "=" in command:
        name, value = command.split("=", 1)
        name = name.strip()
        if name not in SearchFilters.field_names():
            print(f"Unknown filter '{name}'. Known: {', '.join(SearchFilters.field_names())}")
        else:
            session.update_filter(name, value.strip())
    else:
        print(HELP)
    return True


def start_explorer(session: ExplorerSession):
    """Interactive loop over an explorer session."""
    print("\n--- GitHub Repository Explorer ---")
    print(HELP)

    while True:
        command = input("\nexplorer> ").strip()
        if not command:
            continue
        if not handle_command(session, command):
            print("Goodbye!")
            break
