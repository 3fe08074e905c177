import sys
import time
from typing import List, Optional, TextIO

from streettrees import __version__
from streettrees.config import load_settings
from streettrees.query_engine import QueryEngine, format_report
from streettrees.storage import TreeCollection, ingest_file

PROMPT = '\nEnter a tree species to learn more about it ("quit" to stop): '
QUIT = "quit"


def run_queries(engine: QueryEngine, stdin: TextIO, stdout: TextIO) -> None:
    """Prompt for species names until 'quit' or end of input, printing a report for each."""
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            break
        choice = line.rstrip("\r\n")
        if choice.strip().lower() == QUIT:
            break

        report = engine.species_report(choice)
        if report is None:
            print(f"\nThere are no records of '{choice}' on NYC streets.", file=stdout)
        else:
            print(format_report(report), file=stdout)

    print("\nEnd of Program.", file=stdout)


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    if args and args[0] in ("--version", "-v"):
        print(f"NYC Street Trees v{__version__}", file=stdout)
        return 0
    if not args:
        print("Error: the program expects a file name as an argument.", file=sys.stderr)
        return 1

    path = args[0]
    try:
        settings = load_settings(csv_path=path)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    trees = TreeCollection()
    start_time = time.time()
    try:
        ingest_file(trees, path, progress_every=settings.progress_every, stream=sys.stderr)
    except OSError:
        print(f"Error: the file '{path}' does not exist or cannot be opened.", file=sys.stderr)
        return 1
    print(f"Loaded {len(trees):,} trees in {time.time() - start_time:.2f}s", file=sys.stderr)

    run_queries(QueryEngine(trees), stdin, stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
