"""
Main entry point for the worker bundler.
"""
import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .builders import installer, wranglerjs
from .builders.errors import WorkerBundlerError
from .config.settings import Settings
from .utils.logging import set_verbose, setup_logger
from .workflows import BuildWorkflow

logger = setup_logger()


def build_settings(args: argparse.Namespace) -> Settings:
    """Overlay command-line options on the environment settings."""
    overrides = {}
    if args.project_dir is not None:
        overrides["project_dir"] = args.project_dir
    if getattr(args, "out_dir", None) is not None:
        overrides["out_dir"] = args.out_dir
    if getattr(args, "wasm_pack_path", None) is not None:
        overrides["wasm_pack_path"] = args.wasm_pack_path
    return Settings(**overrides)


def run_command(args: argparse.Namespace) -> int:
    settings = build_settings(args)

    if args.command == "build":
        summary = BuildWorkflow(settings).run(skip_install=args.skip_install)
        print(f"Built worker in: {summary.script_path.parent}")
        return 0

    if args.command == "install":
        installer.install(
            settings.tool_name,
            cwd=settings.project_dir,
            package_manager=settings.package_manager
        )
        return 0

    # check
    if wranglerjs.is_installed(settings.project_dir, settings.tool_name):
        print(f"{settings.tool_name} is installed")
        return 0
    print(f"{settings.tool_name} is not installed")
    return 1


def _add_common_options(parser: argparse.ArgumentParser, top_level: bool) -> None:
    """Options accepted both before and after the subcommand.

    Subcommands use SUPPRESS defaults so they never overwrite a value given
    before the subcommand name.
    """
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=None if top_level else argparse.SUPPRESS,
        help="Project containing package.json (default: current directory)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False if top_level else argparse.SUPPRESS,
        help="Show debug output on the console"
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worker-bundler",
        description="Bundle a worker project with wrangler-js",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    _add_common_options(parser, top_level=True)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Build the worker bundle")
    _add_common_options(build, top_level=False)
    build.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory for the bundle (default: ./worker)"
    )
    build.add_argument(
        "--wasm-pack-path",
        type=Path,
        default=None,
        help="wasm-pack executable handed to wrangler-js"
    )
    build.add_argument(
        "--skip-install",
        action="store_true",
        help="Do not install wrangler-js or npm dependencies"
    )

    install = subparsers.add_parser("install", help="Install wrangler-js with npm")
    _add_common_options(install, top_level=False)
    check = subparsers.add_parser("check", help="Check that wrangler-js is installed")
    _add_common_options(check, top_level=False)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    try:
        sys.exit(run_command(args))

    except WorkerBundlerError as e:
        logger.error(str(e))
        print(f"\nError: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nBuild cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
