from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

import uvicorn

from jsanalyzer import __version__
from jsanalyzer.config import load_config
from jsanalyzer.errors import ConfigError, ProjectAccessError
from jsanalyzer.logging_config import setup_logging
from jsanalyzer.pipeline import analyze_project
from jsanalyzer.report import render_report
from jsanalyzer.summarize import summarize_report


def cmd_analyze(args: argparse.Namespace) -> int:
	logger = setup_logging(verbose=args.verbose, quiet=args.quiet)
	root = os.path.abspath(args.path)
	try:
		config = load_config(
			root=root,
			config_file=args.config,
			large_function_threshold=args.threshold,
			top_imports=args.top,
		)
		report = analyze_project(root, config, include_structure=not args.no_structure)
	except (ProjectAccessError, ConfigError) as e:
		logger.error("%s", e)
		return 1

	if args.json:
		print(json.dumps({"report": report.model_dump(), "summary": summarize_report(report)}, indent=2))
	else:
		render_report(report)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	setup_logging(verbose=args.verbose, quiet=args.quiet)
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="jsanalyze")
	parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
	sub = parser.add_subparsers(dest="cmd", required=True)

	common = argparse.ArgumentParser(add_help=False)
	common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
	common.add_argument("-q", "--quiet", action="store_true", help="Only log errors")

	pa = sub.add_parser("analyze", parents=[common], help="Analyze a JavaScript/TypeScript project")
	pa.add_argument("path", nargs="?", default=os.getcwd(), help="Project directory (default: current directory)")
	pa.add_argument("--json", action="store_true", help="Print the report as JSON")
	pa.add_argument("--config", help="Path to a TOML config file")
	pa.add_argument("--threshold", type=int, help="Line span above which a function is large")
	pa.add_argument("--top", type=int, help="Number of most used imports to show")
	pa.add_argument("--no-structure", action="store_true", help="Omit the project structure tree")
	pa.set_defaults(func=cmd_analyze)

	ps = sub.add_parser("serve", parents=[common], help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	return args.func(args)


if __name__ == "__main__":
	sys.exit(main())
