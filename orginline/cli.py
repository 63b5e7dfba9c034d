from __future__ import annotations

import argparse
import json
import os
import sys

from . import config, printjson, t
from . import messages as m

if t.TYPE_CHECKING:
    from .inline import ParseConfig


def main() -> None:
    semver = config.readSemver()
    if semver is None:
        semver = "???"
        semverText = ""
    else:
        semverText = f"orginline v{semver}: "

    argparser = argparse.ArgumentParser(description=f"{semverText}Parses Org-mode inline markup into a node tree.")
    argparser.add_argument("--version", action="version", version=semver)
    argparser.add_argument(
        "-q",
        "--quiet",
        dest="quiet",
        action="count",
        default=0,
        help="Silences one level of message, least-important first.",
    )
    argparser.add_argument(
        "-s",
        "--silent",
        dest="silent",
        action="store_true",
        help="Shorthand for 'as many -q as you need to shut it up'",
    )
    argparser.add_argument(
        "-a",
        "--ascii-only",
        dest="asciiOnly",
        action="store_true",
        help="Force all messages to be ASCII-only.",
    )
    argparser.add_argument(
        "--print",
        dest="printMode",
        choices=m.PRINT_MODES,
        default=None,
        help="How messages are formatted. Options are 'plain' (just text), 'console' (text with console color codes), and 'json' (one JSON object per line). Defaults to 'console'.",
    )
    argparser.add_argument(
        "--die-on",
        dest="errorLevel",
        choices=list(m.MESSAGE_LEVELS.keys()),
        help="Determines what sorts of messages stop processing. Default is 'fatal'.",
    )

    subparsers = argparser.add_subparsers(title="Subcommands", dest="subparserName")

    parseParser = subparsers.add_parser("parse", help="Parse each line of the input and print its node tree.")
    addInputArguments(parseParser)
    parseParser.add_argument(
        "--json",
        dest="json",
        action="store_true",
        help="Print each line's nodes as a single line of JSON, rather than a readable tree.",
    )
    parseParser.add_argument(
        "--spans",
        dest="spans",
        action="store_true",
        help="Include each node's source span in the output.",
    )

    textParser = subparsers.add_parser("text", help="Print the plain-text content of each line, with markup removed.")
    addInputArguments(textParser)

    entitiesParser = subparsers.add_parser("entities", help="List the known entities, or look up some of them.")
    entitiesParser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help="Entity names to look up (without the backslash). Lists every entity if omitted.",
    )
    entitiesParser.add_argument(
        "--entities",
        dest="entities",
        default=None,
        metavar="FILE",
        help="JSON file of extra entities, merged over the built-in table.",
    )

    testParser = subparsers.add_parser("test", help="Run the golden-file testsuite.")
    testParser.add_argument(
        "--rebase",
        default=False,
        action="store_true",
        help="Rewrite the expected output of the specified tests from the current output.",
    )
    testParser.add_argument(
        "--file",
        dest="files",
        default=None,
        nargs="+",
        help="Only run tests whose filenames contain any of these strings as substrings.",
    )

    options = argparser.parse_args()

    if options.silent:
        m.state.printOn = "nothing"
        m.state.silent = True
    else:
        m.state.printOn = m.MessagesState.categoryName(options.quiet)
    if options.errorLevel is not None:
        m.state.dieOn = options.errorLevel
    m.state.asciiOnly = options.asciiOnly
    if options.printMode is None:
        if "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb":
            m.state.printMode = "plain"
        else:
            m.state.printMode = "console"
    else:
        m.state.printMode = options.printMode

    if options.subparserName == "parse":
        handleParse(options)
    elif options.subparserName == "text":
        handleText(options)
    elif options.subparserName == "entities":
        handleEntities(options)
    elif options.subparserName == "test":
        handleTest(options)
    else:
        argparser.print_help()


def addInputArguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "infile",
        nargs="?",
        default=None,
        help='Path to the source file, or stdin ("-"). Each line is parsed as its own paragraph.',
    )
    parser.add_argument(
        "--text",
        dest="text",
        default=None,
        help="Parse this text instead of reading a file.",
    )
    parser.add_argument(
        "--entities",
        dest="entities",
        default=None,
        metavar="FILE",
        help="JSON file of extra entities, merged over the built-in table.",
    )


def readInputLines(options: argparse.Namespace) -> list[str]:
    if options.text is not None:
        text = options.text
    elif options.infile is None or options.infile == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(options.infile, encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            m.die(f"Couldn't read input file '{options.infile}':\n{e}")
            return []
    return linesFromText(text)


def linesFromText(text: str) -> list[str]:
    # One entry per line, without line endings;
    # a trailing newline doesn't produce an extra empty line.
    lines = [line.removesuffix("\r") for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def loadParseConfig(options: argparse.Namespace) -> ParseConfig:
    from .inline import ParseConfig

    try:
        return ParseConfig.fromOptions(options)
    except (OSError, ValueError, KeyError) as e:
        m.die(f"Couldn't load the entities file '{options.entities}':\n{e}")
        return ParseConfig()


def handleParse(options: argparse.Namespace) -> None:
    from .inline import Session, nodesToJson, parseInline

    parseConfig = loadParseConfig(options)
    session = Session()
    for i, line in enumerate(readInputLines(options)):
        nodes = parseInline(line, config=parseConfig, session=session)
        if options.json:
            m.p(json.dumps(nodesToJson(nodes, withSpans=options.spans), ensure_ascii=False))
        else:
            if i != 0:
                m.p(m.printColor("#" * 20, "dark gray"))
            m.p(printjson.printNodes(nodes, withSpans=options.spans))


def handleText(options: argparse.Namespace) -> None:
    from .inline import Session, parseInline, textFromNodes

    parseConfig = loadParseConfig(options)
    session = Session()
    for line in readInputLines(options):
        m.p(textFromNodes(parseInline(line, config=parseConfig, session=session)))


def handleEntities(options: argparse.Namespace) -> None:
    from . import entities

    table = loadParseConfig(options).entities
    if not options.names:
        for name, entity in sorted(table.items()):
            m.p(f"{m.printColor(name.ljust(12), 'cyan')} {entity.unicode}")
        return
    for name in options.names:
        entity = entities.lookup(name.removeprefix("\\"), table)
        if entity is None:
            m.warn(f"Unknown entity '{name}'.")
            continue
        m.p(printjson.printjson(entity))


def handleTest(options: argparse.Namespace) -> None:
    from . import test

    m.state.dieOn = "nothing"
    filters = test.TestFilter.fromOptions(options)
    if options.rebase:
        test.rebase(filters)
    else:
        result = test.run(filters)
        sys.exit(0 if result else 1)
