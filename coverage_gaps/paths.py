from __future__ import annotations

import pathlib


class PathError(ValueError):
    pass


def relative_path(root: pathlib.Path | str, path: pathlib.Path | str) -> str:
    """
    Express `path` relative to `root`, always with "/" separators so the
    report reads the same on every OS. `root` may also be a sibling of
    one of `path`'s ancestors, in which case the result starts with "../".
    """
    if not isinstance(path, pathlib.PurePath):
        path = pathlib.PurePath(path)
    try:
        relative = path.relative_to(root, walk_up=True)
    except ValueError as exc:
        raise PathError(f"Cannot express {path} relative to {root}") from exc
    return relative.as_posix()
