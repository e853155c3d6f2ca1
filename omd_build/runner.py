"""
Build runner — top-level orchestration: git → version → go build → env.

Strictly sequential.  Every external call blocks until it finishes and
any failure aborts the run; there is no retry.

Usage (CLI)::

    python -m omd_build --out ./build/
    ohmydot_version=1.2.3 omd-build -o dist/ --receipt dist/build_receipt.json
"""
from __future__ import annotations

import argparse
import logging
import platform
import sys
from pathlib import Path
from typing import List, Optional

from omd_build.config import Settings, settings as default_settings
from omd_build.core.commands import CommandRunner, SubprocessRunner
from omd_build.core.compiler import GoBuild, LinkFlags
from omd_build.core.environment import EnvironmentProvider, ProcessEnvironment
from omd_build.core.envsetup import EnvSetupResult, UserEnvironmentStore, configurator_for
from omd_build.core.git import resolve_commit
from omd_build.core.paths import expand_output_path, resolve_output_path
from omd_build.core.version import resolve_version
from omd_build.errors import BuildError
from omd_build.io.schema import BuildReceipt, EnvSetupInfo, now_iso
from omd_build.io.writer import write_receipt

logger = logging.getLogger(__name__)


def run_build(
    out: str,
    *,
    settings: Settings,
    runner: CommandRunner,
    env: EnvironmentProvider,
    system: str,
    dry_run: bool = False,
    configure_env: bool = True,
    store: Optional[UserEnvironmentStore] = None,
    repo_dir: Optional[Path] = None,
) -> BuildReceipt:
    """
    Run one build.

    Parameters
    ----------
    out : str
        Output path handed to ``go build -o`` (a leading ``~`` is expanded).
    settings : Settings
        Variable names, link symbols and tool binaries.
    runner : CommandRunner
        Executes git, go and (on Windows) powershell.
    env : EnvironmentProvider
        Source of the version override and the Unix shell hints.
    system : str
        ``platform.system().lower()`` of the target machine.
    dry_run : bool
        Resolve and report only; skip compiling and environment setup.
    configure_env : bool
        Run the post-build environment step.
    store : UserEnvironmentStore, optional
        Windows user environment; defaults to the PowerShell-backed store.

    Returns
    -------
    BuildReceipt
    """
    print("Building to: " + out)

    commit = resolve_commit(runner, git=settings.GIT_BINARY, repo_dir=repo_dir)
    print("Commit hash: " + commit)

    version = resolve_version(env, runner, settings, repo_dir=repo_dir)
    print("Version: " + version.value)

    flags = LinkFlags.from_settings(version.value, commit, settings)
    go = GoBuild(runner, go=settings.GO_BINARY, target=settings.BUILD_TARGET)
    build_out = expand_output_path(out)
    command = go.command(flags, build_out)
    abs_out = resolve_output_path(build_out, cwd=repo_dir)

    receipt = BuildReceipt(
        version=version.value,
        version_source=version.source.value,
        commit=commit,
        output_path=abs_out,
        ldflags=flags.to_ldflags(),
        command=command,
        platform=system,
        dry_run=dry_run,
        created_at=now_iso(),
    )

    if dry_run:
        print("Dry run: " + " ".join(command))
        return receipt

    go.build(flags, build_out, cwd=repo_dir)
    logger.info("Build finished: %s", abs_out)

    if not configure_env:
        return receipt

    configurator = configurator_for(system, settings, runner, env, store=store)
    if configurator is None:
        logger.warning("No environment setup for platform %r, skipping", system)
        return receipt

    result = configurator.configure(abs_out)
    for line in result.instructions:
        print(line)

    receipt.env_setup = _env_setup_info(result, settings.DEBUG_ENV_VAR)
    return receipt


def _env_setup_info(result: EnvSetupResult, debug_var: str) -> EnvSetupInfo:
    return EnvSetupInfo(
        debug_var=debug_var,
        debug_var_updated=result.debug_var_updated,
        path_updated=result.path_updated,
        instructions=list(result.instructions),
    )


# ── CLI ──────────────────────────────────────────────────────────────────────

def build_parser(default_out: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="omd-build",
        description="omd_build — build oh-my-dot with version and commit baked in",
    )
    parser.add_argument(
        "rest",
        nargs="*",
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-o", "--out",
        default=default_out,
        help=f"Output path passed to go build -o (default: {default_out})",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve version and commit, print the build command, do not compile",
    )
    parser.add_argument(
        "--no-env-setup",
        action="store_true",
        help="Skip pointing the debug variable and PATH at the build",
    )
    parser.add_argument(
        "--receipt",
        type=Path,
        default=None,
        help="Write a JSON build receipt to this path",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = build_parser(default_settings.DEFAULT_OUT)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.rest:
        logger.debug("Ignoring positional arguments: %s", args.rest)

    try:
        receipt = run_build(
            args.out,
            settings=default_settings,
            runner=SubprocessRunner(),
            env=ProcessEnvironment(),
            system=platform.system().lower(),
            dry_run=args.dry_run,
            configure_env=not args.no_env_setup,
        )
    except BuildError as e:
        logger.error("%s", e)
        sys.exit(1)

    if args.receipt is not None:
        write_receipt(receipt, args.receipt)
        logger.info("Receipt written to %s", args.receipt)


if __name__ == "__main__":
    main()
