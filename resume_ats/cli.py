"""CLI - Command line interface for resume import and ATS scoring."""

import argparse
import asyncio
import json
import sys
import time
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from .config import (
    DEFAULT_CONFIG_PATH,
    ImportConfig,
    Severity,
    apply_env_overrides,
    config_from_mapping,
    has_errors,
    load_raw_config,
    validate_config,
)
from .observability import OperationObserver, setup_logging
from .tools import ATSScorerTool, JobDescriptionTool, ResumeImportTool, ToolResult

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-ats",
        description="Resume ATS - parse plain-text resumes and score them for ATS compatibility",
    )
    parser.add_argument(
        "--config", "-c",
        default=DEFAULT_CONFIG_PATH,
        help="Path to configuration file",
    )
    parser.add_argument(
        "--workspace", "-w",
        default=None,
        help="Workspace directory for input files (default: from config, else current directory)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Verbose output (debug logging and session summary)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the structured result as JSON instead of a report",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    parse_cmd = subparsers.add_parser(
        "parse", help="Parse a plain-text resume into sections", description=ResumeImportTool.description
    )
    parse_cmd.add_argument("path", help="Resume text file")

    score_cmd = subparsers.add_parser(
        "score", help="Score a resume for ATS compatibility", description=ATSScorerTool.description
    )
    score_cmd.add_argument("path", help="Resume file (.json ResumeData or plain text)")
    score_cmd.add_argument("--jd", dest="jd_path", default="", help="Job description file")
    score_cmd.add_argument("--jd-text", default="", help="Job description text")
    score_cmd.add_argument("--industry", default=None, help="Industry keyword list when no job description is given")

    jd_cmd = subparsers.add_parser(
        "jd", help="Parse a job description", description=JobDescriptionTool.description
    )
    jd_cmd.add_argument("path", help="Job description file")

    return parser


def load_settings(config_path: str, workspace: Optional[str]) -> Optional[ImportConfig]:
    """Load and validate config. Returns ``None`` when validation finds errors."""
    try:
        raw_config = load_raw_config(config_path)
    except FileNotFoundError:
        if config_path != DEFAULT_CONFIG_PATH:
            console.print(f"⚠️ Config file not found: {config_path}", style="yellow")
            console.print("Using default configuration.", style="dim")
        raw_config = {}
    except ValueError as e:
        console.print(f"❌ {escape(str(e))}", style="red")
        return None

    raw_config = apply_env_overrides(raw_config)
    if workspace:
        raw_config["workspace_dir"] = workspace

    issues = validate_config(raw_config)
    if issues:
        for issue in issues:
            icon = "❌" if issue.severity == Severity.ERROR else "⚠️"
            style = "red" if issue.severity == Severity.ERROR else "yellow"
            console.print(f"  {icon} {escape(f'[{issue.field}]')} {escape(issue.message)}", style=style)

        if has_errors(issues):
            console.print("\n💡 Fix the errors above in config/config.local.yaml, then try again.", style="dim")
            return None

    return config_from_mapping(raw_config)


async def run_command(args: argparse.Namespace, settings: ImportConfig) -> ToolResult:
    if args.command == "parse":
        tool = ResumeImportTool(settings.workspace_dir, history_limit=settings.history_limit)
        return await tool.execute(path=args.path)
    if args.command == "score":
        tool = ATSScorerTool(settings.workspace_dir, default_industry=settings.default_industry)
        return await tool.execute(
            path=args.path,
            job_description=args.jd_text,
            job_description_path=args.jd_path,
            industry=args.industry or "",
        )
    return await JobDescriptionTool(settings.workspace_dir).execute(path=args.path)


def render(result: ToolResult, command: str, as_json: bool) -> None:
    if not result.success:
        console.print(f"\n❌ Error: {escape(str(result.error))}", style="red")
        return
    if as_json:
        console.print_json(json.dumps(result.data, default=str))
        return
    titles = {"parse": "📄 Resume Import", "score": "📊 ATS Score", "jd": "📋 Job Description"}
    console.print(Panel(Markdown(result.output), title=titles.get(command, command)))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings(args.config, args.workspace)
    if settings is None:
        return 2

    setup_logging(verbose=args.verbose, level=settings.log_level)
    observer = OperationObserver(verbose=args.verbose)

    started = time.perf_counter()
    result = asyncio.run(run_command(args, settings))
    observer.log_operation(
        args.command,
        (time.perf_counter() - started) * 1000,
        success=result.success,
        path=args.path,
    )

    render(result, args.command, args.json)

    if args.verbose:
        summary = observer.get_session_summary()
        console.print(
            f"{summary['operations']} operation(s), {summary['failures']} failed, "
            f"{summary['total_duration_ms']}ms",
            style="dim",
        )
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
