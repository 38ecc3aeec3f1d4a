#!/usr/bin/env python3
"""
Title Rating Finder
Look up the rating and details of a movie or TV show, or run the lookup server.
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from finder.client import DEFAULT_SERVER_URL, FinderClient, FinderSession, ViewState
from finder.config import load_config
from finder.errors import FinderError, InvalidRequestError, TitleNotFoundError
from finder.records import MediaRecord, Suggestion


def get_user_input(prompt: str) -> str:
    """Read a line from the terminal, exiting cleanly on Ctrl+C / Ctrl+D."""
    try:
        return input(prompt)
    except (KeyboardInterrupt, EOFError):
        print("\n\n⚠️  Interrupted by user")
        sys.exit(1)


def format_record(record: MediaRecord) -> str:
    """Render a record as a terminal block."""
    kind = '📺' if record.media_kind == 'series' else '🎬'
    lines = [
        f"{kind} {record.title} ({record.year})",
        "-" * 80,
        f"⭐ Rating:   {record.rating}",
        f"Genre:      {record.genre}",
        f"Runtime:    {record.runtime}",
        f"Director:   {record.director}",
        f"Cast:       {record.cast}",
        "",
        record.plot,
        "",
    ]
    for entry in record.ratings_breakdown:
        lines.append(f"  {entry.source}: {entry.value}")
    lines.append(f"🔗 {record.detail_link}")
    return "\n".join(lines)


def format_suggestions(suggestions: List[Suggestion]) -> str:
    """Render a numbered suggestion list."""
    lines = []
    for idx, suggestion in enumerate(suggestions, 1):
        label = 'TV' if suggestion.media_kind == 'series' else 'MOVIE'
        rating = f" ⭐ {suggestion.rating}" if suggestion.rating else ''
        lines.append(f"{idx}. {suggestion.title} ({suggestion.year}) [{label}]{rating}")
    return "\n".join(lines)


def prompt_selection(suggestions: List[Suggestion]) -> Optional[Suggestion]:
    """Show suggestions and prompt the user to pick one (0 to skip)."""
    print(format_suggestions(suggestions))
    print("0. Skip")
    print("-" * 80)

    while True:
        choice = get_user_input("Select a title (0 to skip): ").strip()
        try:
            choice_num = int(choice)
        except ValueError:
            print("Please enter a valid number")
            continue

        if choice_num == 0:
            return None
        if 1 <= choice_num <= len(suggestions):
            return suggestions[choice_num - 1]
        print(f"Please enter a number between 0 and {len(suggestions)}")


def handle_lookup_command(args) -> int:
    """Handle the 'lookup' subcommand."""
    client = FinderClient(args.server)
    title = args.title

    while True:
        try:
            record = client.lookup(title)
        except InvalidRequestError as e:
            print(f"❌ {e}")
            return 1
        except TitleNotFoundError as e:
            print(f"❌ {e}")
            if not e.suggestions:
                return 1
            selected = prompt_selection(e.suggestions)
            if selected is None:
                print("⊘ Skipped by user")
                return 1
            title = selected.title
            continue
        except FinderError as e:
            print(f"❌ {e}")
            return 1

        print(format_record(record))
        return 0


def handle_suggest_command(args) -> int:
    """Handle the 'suggest' subcommand."""
    client = FinderClient(args.server)
    try:
        suggestions = client.suggest(args.title)
    except FinderError as e:
        print(f"❌ {e}")
        return 1

    if not suggestions:
        print(f"⊘ No suggestions for '{args.title}'")
        return 0

    print(f"\n🔍 Suggestions for '{args.title}':")
    print("-" * 80)
    print(format_suggestions(suggestions))
    return 0


BROWSE_HELP = """Commands:
  <title>     look up a title
  ?<title>    list matching titles
  ~<text>     type into the search box; live suggestions show after a pause
  <number>    open a listed title or live suggestion
  <enter>     refresh the current view
  b           go back
  q           quit"""


def render_session(session: FinderSession) -> None:
    """Print the active view of a browsing session."""
    if session.error:
        print(f"❌ {session.error}")
    if session.view == ViewState.DETAILS and session.record:
        print(format_record(session.record))
    elif session.view == ViewState.RESULTS and session.results:
        print(format_suggestions(session.results))
    elif session.view == ViewState.LANDING and session.live_suggestions:
        print(f"💡 Suggestions for '{session.query.strip()}':")
        print(format_suggestions(session.live_suggestions))


def handle_browse_command(args, session: Optional[FinderSession] = None) -> int:
    """Handle the 'browse' subcommand: an interactive landing/results/details loop."""
    session = session or FinderSession(FinderClient(args.server))
    print("🎬 Title Rating Finder")
    print("=" * 80)
    print(BROWSE_HELP)

    while True:
        line = get_user_input(f"\n[{session.view.value}] > ").strip()
        if line == 'q':
            session.debouncer.cancel()
            return 0
        if line == 'b':
            session.back()
        elif not line:
            pass
        elif line.isdigit() and (session.view == ViewState.RESULTS or session.live_suggestions):
            try:
                session.pick(int(line) - 1)
            except IndexError as e:
                print(f"❌ {e}")
                continue
        elif line.startswith('?'):
            session.show_results(line[1:])
        elif line.startswith('~'):
            session.type_query(line[1:])
        else:
            session.submit(line)
        render_session(session)


def handle_serve_command(args) -> int:
    """Handle the 'serve' subcommand."""
    from finder.server import create_app

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )

    try:
        config = load_config(Path(args.config) if args.config else None)
    except FinderError as e:
        print(f"❌ {e}")
        return 1

    print("🎬 Title Rating Finder - Server")
    print("=" * 80)
    print(f"Provider: {config.provider}")
    print(f"Suggestion cap: {config.suggestion_cap} (fallback: {config.fallback_cap})")
    print(f"Listening on: http://{args.host}:{args.port}")
    print("=" * 80)

    app = create_app(config)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Title Rating Finder',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the lookup server against TMDB
  export TMDB_API_KEY='your_key_here'
  python title_finder.py serve

  # Run it against OMDb instead
  FINDER_PROVIDER=omdb OMDB_API_KEY='your_key_here' python title_finder.py serve

  # Look up a title
  python title_finder.py lookup "Inception"

  # List suggestions
  python title_finder.py suggest "Dark"

  # Interactive session
  python title_finder.py browse

Environment Variables:
  FINDER_PROVIDER       'tmdb' (default) or 'omdb'
  TMDB_API_KEY          Optional key for the TMDB provider
  OMDB_API_KEY          Required for the OMDb provider
        """
    )

    subparsers = parser.add_subparsers(dest='command', required=True, help='Available commands')

    serve_parser = subparsers.add_parser('serve', help='Run the lookup HTTP server')
    serve_parser.add_argument('--host', default='127.0.0.1', help='Bind address (default: 127.0.0.1)')
    serve_parser.add_argument('--port', type=int, default=5000, help='Port (default: 5000)')
    serve_parser.add_argument('--config', help='Path to a finder_config.yaml file')
    serve_parser.add_argument('--debug', action='store_true', help='Enable Flask debug mode')

    for name, help_text in (('lookup', 'Show the rating and details of a title'),
                            ('suggest', 'List titles matching a partial query')):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('title', help='Movie or TV show title')
        sub.add_argument('--server', default=DEFAULT_SERVER_URL, help=f'Server URL (default: {DEFAULT_SERVER_URL})')

    browse_parser = subparsers.add_parser('browse', help='Interactive search session')
    browse_parser.add_argument('--server', default=DEFAULT_SERVER_URL, help=f'Server URL (default: {DEFAULT_SERVER_URL})')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.command == 'serve':
        if not 1 <= args.port <= 65535:
            print("❌ Port must be between 1 and 65535")
            return 1
        return handle_serve_command(args)
    elif args.command == 'lookup':
        return handle_lookup_command(args)
    elif args.command == 'suggest':
        return handle_suggest_command(args)
    elif args.command == 'browse':
        return handle_browse_command(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
