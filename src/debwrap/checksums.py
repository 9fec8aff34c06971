"""
MD5 checksum manifests for staged package files.
"""

from pathlib import Path

from cryptography.hazmat.primitives import hashes

_CHUNK_SIZE = 64 * 1024


def file_md5(path: Path) -> str:
    """Returns the hex MD5 digest of a file, read in chunks."""
    digest = hashes.Hash(hashes.MD5())
    with path.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            digest.update(chunk)
    return digest.finalize().hex()


def md5sums_for(root: Path, subdir: str = "usr") -> str:
    """
    Renders a DEBIAN/md5sums body for every regular file under `root/subdir`.

    Paths are relative to `root`, in sorted order; directories are skipped.
    """
    base = root / subdir
    if not base.is_dir():
        return ""
    lines = []
    for path in sorted(base.rglob("*")):
        if path.is_file():
            lines.append(f"{file_md5(path)}  {path.relative_to(root).as_posix()}\n")
    return "".join(lines)
