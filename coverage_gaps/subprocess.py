from __future__ import annotations

import pathlib
import shutil
import subprocess


class SubProcessError(Exception):
    pass


class MissingTool(Exception):
    pass


def run(
    *args: str, path: pathlib.Path, timeout: float | None = None, **kwargs
) -> str:
    try:
        return subprocess.run(
            args,
            cwd=path,
            text=True,
            check=True,
            capture_output=True,
            timeout=timeout,
            **kwargs,
        ).stdout
    except subprocess.CalledProcessError as exc:
        raise SubProcessError("\n".join([exc.stdout, exc.stderr])) from exc
    except subprocess.TimeoutExpired as exc:
        raise SubProcessError(
            f"{' '.join(args)} did not finish within {timeout} seconds"
        ) from exc
    except FileNotFoundError as exc:
        raise SubProcessError(f"Executable not found: {args[0]}") from exc


def check_tools(*tools: str) -> None:
    """
    Make sure every executable in `tools` can be found on the PATH.
    Raises MissingTool listing all of the missing ones at once.
    """
    missing = [tool for tool in tools if shutil.which(tool) is None]
    if missing:
        raise MissingTool(f"Required tool(s) not found on PATH: {', '.join(missing)}")


def check_cargo_subcommand(subcommand: str, path: pathlib.Path) -> None:
    # cargo subcommands are separate binaries (cargo-llvm-cov), they are
    # only reachable through cargo itself.
    try:
        run("cargo", subcommand, "--version", path=path)
    except SubProcessError as exc:
        raise MissingTool(
            f"cargo {subcommand} is not available. Install it with "
            f"`cargo install cargo-{subcommand}`."
        ) from exc
