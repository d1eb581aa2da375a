#!/usr/bin/env python3
"""
CLI for inspecting how lambdalang classifies, converts and resolves tokens.

Usage:
    python -m lambdalang classify TOKEN... [--json] [--explain] [--max-errors N]
    python -m lambdalang convert TOKEN TYPE
    python -m lambdalang resolve NAME [--env FILE]

Examples:
    # Which type does a token become?
    python -m lambdalang classify 5 3.14 0x1F 99999999999999999999 true abc

    # Show every type that would accept an ambiguous token
    python -m lambdalang classify --explain 5

    # Widen or narrow a value
    python -m lambdalang convert 42 float
    python -m lambdalang convert 99999999999999999999 int     # fails: out of range

    # Resolve a name against a YAML environment file
    python -m lambdalang resolve x --env bindings.yaml
"""

import argparse
import json
import sys

from .config import configure_logging, default_environment_path, load_environment
from .errors import ClassificationError, DiagnosticCollector, LangError
from .runtime.context import Environment
from .runtime.registry import get_classifier
from .runtime.resolver import resolve
from .runtime.values import VarValue
from .types import value_type_of


def _report(error: LangError) -> int:
    print(str(error), file=sys.stderr)
    return 1


def cmd_classify(args):
    """Classify each token and print its type and rendering."""
    classifier = get_classifier()
    diagnostics = DiagnosticCollector(max_errors=args.max_errors)
    results = []

    for token in args.tokens:
        entry = {"token": token}
        try:
            value = classifier.classify(token)
        except LangError as e:
            diagnostics.add_error(e)
            entry["error"] = e.diagnostic.to_json()
        else:
            entry["type"] = value.value_type.value
            entry["value"] = value.render()
        if args.explain:
            entry["accepted_by"] = [t.value for t in classifier.recognizers_for(token)]
        results.append(entry)
        if diagnostics.should_stop:
            break

    if args.json:
        print(json.dumps(results, indent=2))
    else:
        for entry in results:
            if "error" in entry:
                line = f"{entry['token']} -> error[{entry['error']['code']}]"
            else:
                line = f"{entry['token']} -> {entry['type']} {entry['value']}"
            if args.explain:
                line += f"  (accepted by: {', '.join(entry['accepted_by']) or 'none'})"
            print(line)

    if diagnostics.has_errors:
        print(diagnostics.format_all(), file=sys.stderr)
        return 1
    return 0


def cmd_convert(args):
    """Classify a token, then convert it to the requested type."""
    target = value_type_of(args.type)
    if target is None:
        print(f"Error: Unknown type: {args.type}", file=sys.stderr)
        return 2

    try:
        value = get_classifier().classify(args.token)
        converted = value.to(target)
    except LangError as e:
        return _report(e)

    print(f"{value.value_type} {value.render()} -> {converted.value_type} {converted.render()}")
    return 0


def cmd_resolve(args):
    """Resolve an identifier against an environment file."""
    env_path = args.env or default_environment_path()
    try:
        env = load_environment(env_path) if env_path else Environment()
        try:
            value = get_classifier().classify(args.name)
        except ClassificationError:
            # Symbolic operator names such as + are not identifiers.
            value = VarValue(args.name)
        resolved = resolve(value, env)
    except LangError as e:
        return _report(e)

    if resolved is value:
        print(f"{args.name} -> operator")
    else:
        print(f"{args.name} -> {resolved.value_type} {resolved.render()}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='python -m lambdalang',
        description='Classify, convert and resolve lambdalang tokens',
    )
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='action', required=True)

    # classify command
    classify_parser = subparsers.add_parser('classify', help='Classify raw tokens')
    classify_parser.add_argument('tokens', nargs='+', metavar='TOKEN', help='Raw token text')
    classify_parser.add_argument('--json', action='store_true', help='Print results as JSON')
    classify_parser.add_argument('--explain', action='store_true',
                                 help='List every type that accepts each token')
    classify_parser.add_argument('--max-errors', type=int, default=20, metavar='N',
                                 help='Stop after N unrecognized tokens (default: 20)')

    # convert command
    convert_parser = subparsers.add_parser('convert', help='Convert a token to another type')
    convert_parser.add_argument('token', help='Raw token text')
    convert_parser.add_argument('type', help='Target type (string, int, bigint, float, var, bool, ast)')

    # resolve command
    resolve_parser = subparsers.add_parser('resolve', help='Resolve a name in an environment')
    resolve_parser.add_argument('name', help='Identifier to resolve')
    resolve_parser.add_argument('-e', '--env', metavar='FILE',
                                help='YAML environment file (default: $LAMBDALANG_ENV)')

    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.action == 'classify':
        return cmd_classify(args)
    elif args.action == 'convert':
        return cmd_convert(args)
    elif args.action == 'resolve':
        return cmd_resolve(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
