"""Command line entry point: ``line-matcher {chat,batch,build,serve}``."""
from __future__ import annotations
import argparse
import sys
from typing import Callable, List, Optional

from matcher.config import Settings
from matcher.errors import ConfigurationError, MatcherError, NoMatchError, NoSuccessorError, UsageError
from matcher.loaders import build_index, build_matcher, read_stopwords
from matcher.log import setup_logging
from matcher.normalize import EMPTY_STOPWORDS
from matcher.selector import Matcher
from matcher.snapshot import load_index, save_index

from .batch import run_batch, summarize


def _add_corpus_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--corpus", action="append", default=None,
                   help="Corpus file, one document per line (repeatable; default: LINE_MATCHER_CORPUS)")
    p.add_argument("--stopwords", default=None, help="Stopword file (default: LINE_MATCHER_STOPWORDS)")


def _add_match_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--alternating", action="store_true", default=None,
                   help="Answer with the line after the best match")
    p.add_argument("--seed", type=int, default=None, help="Seed for tie-breaking")


def _settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env().override(
        corpus_paths=tuple(args.corpus) if getattr(args, "corpus", None) else None,
        stopwords_path=getattr(args, "stopwords", None),
        snapshot_path=getattr(args, "snapshot", None),
        alternating=getattr(args, "alternating", None),
        seed=getattr(args, "seed", None),
        log_level=getattr(args, "log_level", None),
        log_file=getattr(args, "log_file", None),
    )
    setup_logging(settings.log_level, settings.log_file)
    return settings


def _matcher(settings: Settings) -> Matcher:
    if settings.snapshot_path:
        index = load_index(settings.snapshot_path)
        return Matcher(index, alternating=settings.alternating, random_state=settings.seed)
    return build_matcher(
        settings.corpus_paths,
        settings.stopwords_path,
        alternating=settings.alternating,
        random_state=settings.seed,
    )


# ----------------------------- commands ------------------------------------
def chat(
    matcher: Matcher,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> int:
    """Read lines until a blank line or EOF, answering each with the best match."""
    read = read or input
    write = write or print
    write("Hi, tell or ask me something (blank line to quit).")
    while True:
        try:
            line = read("> ")
        except (EOFError, KeyboardInterrupt):
            break
        try:
            write(matcher.match(line))
        except UsageError:
            break
        except (NoSuccessorError, NoMatchError) as e:
            write(f"(no reply: {e})")
    return 0


def cmd_chat(args: argparse.Namespace) -> int:
    return chat(_matcher(_settings(args)))


def cmd_batch(args: argparse.Namespace) -> int:
    settings = _settings(args)
    outcomes = run_batch(
        args.cases,
        stopwords_path=settings.stopwords_path,
        alternating=settings.alternating,
        random_state=settings.seed,
    )
    for o in outcomes:
        print(f"{o.query}\t{o.actual if o.error is None else 'ERROR: ' + o.error}")
    s = summarize(outcomes)
    print(f"{s['passed']}/{s['total']} passed, {s['errors']} errors")
    return 0 if s["failed"] == 0 else 1


def cmd_build(args: argparse.Namespace) -> int:
    settings = _settings(args)
    stopwords = read_stopwords(settings.stopwords_path) if settings.stopwords_path else EMPTY_STOPWORDS
    index = build_index(settings.corpus_paths, stopwords, strict=True)
    save_index(index, args.output)
    print(f"{len(index)} documents -> {args.output}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("app.api:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="line-matcher", description="TF-IDF line matcher")
    parser.add_argument("--log-level", default=None, help="Logging level (default: LINE_MATCHER_LOG_LEVEL or INFO)")
    parser.add_argument("--log-file", default=None, help="Also log to this rotating file")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("chat", help="Interactive chat against a corpus")
    _add_corpus_options(p)
    _add_match_options(p)
    p.add_argument("--snapshot", default=None, help="Load a saved index instead of corpus files")
    p.set_defaults(func=cmd_chat)

    p = sub.add_parser("batch", help="Run (file, query, answer) cases from a JSON file")
    p.add_argument("cases", help="JSON array of {file, query, answer}")
    p.add_argument("--stopwords", default=None, help="Stopword file (default: LINE_MATCHER_STOPWORDS)")
    _add_match_options(p)
    p.set_defaults(func=cmd_batch)

    p = sub.add_parser("build", help="Index corpus files and save a snapshot")
    _add_corpus_options(p)
    p.add_argument("-o", "--output", required=True, help="Snapshot file to write")
    p.set_defaults(func=cmd_build)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default="127.0.0.1")
    p.add_argument("--port", type=int, default=8000)
    p.add_argument("--reload", action="store_true", help="Enable auto-reload (dev only)")
    p.set_defaults(func=cmd_serve)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except ConfigurationError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return 2
    except MatcherError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
