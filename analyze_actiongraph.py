#!/usr/bin/env python3
"""
Action Graph Analyzer - command line interface

Usage:

    go build -debug-actiongraph=compile.json ./my-program
    python analyze_actiongraph.py tree < compile.json
    python analyze_actiongraph.py graph --why github.com/org/lib/k8s -f compile.json > graph.dot
    dot -Tsvg graph.dot > graph.svg
"""

import sys
from actiongraph import ActionGraphAnalyzer, ActionGraphError
from actiongraph.formatters import TOP_TEMPLATE, TREE_TEMPLATE, TYPES_TEMPLATE, render_dot, render_rows


def add_input_options(parser, file_default, quiet_default):
    parser.add_argument('-f', '--file', default=file_default, help='JSON file to read (use - for stdin)')
    parser.add_argument('-q', '--quiet', action='store_true', default=quiet_default,
                        help='Do not print loading progress')


def build_parser():
    import argparse
    parser = argparse.ArgumentParser(
        prog='actiongraph',
        description='Analyze the build action graph written by go build -debug-actiongraph.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  actiongraph top -f compile.json
  actiongraph tree -L 2 < compile.json
  actiongraph tree github.com/org/project -f compile.json
  actiongraph graph --why github.com/org/project/lib -f compile.json > graph.dot
  actiongraph types -f compile.json
        """
    )
    add_input_options(parser, '-', False)

    # Input options are accepted after the subcommand as well. SUPPRESS keeps
    # a subcommand from resetting a value given before it.
    common = argparse.ArgumentParser(add_help=False)
    add_input_options(common, argparse.SUPPRESS, argparse.SUPPRESS)

    commands = parser.add_subparsers(dest='command', metavar='command')
    commands.required = True

    top = commands.add_parser('top', parents=[common], help='List slowest build steps')
    top.add_argument('-n', '--limit', type=int, default=20,
                     help='number of slowest build steps to show (0 for all)')
    top.add_argument('--format', default=TOP_TEMPLATE, help='template for output')

    tree = commands.add_parser('tree', parents=[common], help='Total build times by directory')
    tree.add_argument('packages', nargs='*', help='package paths to focus on')
    tree.add_argument('-L', '--level', type=int, default=-1,
                      help='descend only level directories deep (-ve for unlimited)')
    tree.add_argument('--format', default=TREE_TEMPLATE, help='template for output')

    graph = commands.add_parser('graph', aliases=['dot'], parents=[common], help='Graphviz visualisation of the build steps')
    graph.add_argument('--why', default='', help='show only paths to the given package')

    types = commands.add_parser('types', parents=[common], help='List slowest action types')
    types.add_argument('--format', default=TYPES_TEMPLATE, help='template for output')

    return parser


def run(args, out=None):
    """Run one subcommand. All output is produced only after the query succeeds."""
    out = out or sys.stdout
    analyzer = ActionGraphAnalyzer(show_progress=not args.quiet)
    analyzer.process_file(args.file)

    if args.command == 'top':
        lines = list(render_rows(analyzer.top(args.limit), args.format))
    elif args.command == 'tree':
        lines = list(render_rows(analyzer.tree(args.packages, args.level), args.format))
    elif args.command == 'types':
        lines = list(render_rows(analyzer.types(), args.format))
    else:
        out.write(render_dot(analyzer.steps, analyzer.why(args.why)))
        return

    for line in lines:
        print(line, file=out)


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        run(args)
    except FileNotFoundError:
        print(f"actiongraph: file '{args.file}' not found", file=sys.stderr)
        sys.exit(1)
    except ActionGraphError as e:
        print(f"actiongraph: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
