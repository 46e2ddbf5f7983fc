"""BlobPath — immutable, validated ``container/blob`` path value object."""

from __future__ import annotations

import re
from typing import Final

from blobfs._errors import InvalidPath, NotAFile, PathNotFound

SEP: Final = "/"

# A scheme needs at least two characters so Windows drive letters don't match.
_URI_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]{1,35}:")


# region: abstract path helpers


def is_likely_uri(s: str) -> bool:
    """Return ``True`` if ``s`` starts with something that looks like a URI scheme."""
    return bool(_URI_SCHEME.match(s))


def remove_trailing_slash(s: str) -> str:
    """Strip a single trailing separator."""
    if s.endswith(SEP):
        return s[:-1]
    return s


def assert_no_trailing_slash(s: str) -> None:
    """Raise if ``s`` ends with a separator.

    :raises InvalidPath: If the path has a trailing separator.
    """
    if s.endswith(SEP):
        raise InvalidPath("Expected a path without a trailing separator", path=s)


def split_abstract_path(s: str) -> list[str]:
    """Split a ``/``-delimited path into its segments."""
    if not s:
        return []
    return s.split(SEP)


def join_abstract_path(parts: tuple[str, ...] | list[str]) -> str:
    return SEP.join(parts)


def validate_abstract_path_parts(parts: tuple[str, ...] | list[str]) -> str | None:
    """Check each segment of a path.

    :returns: A description of the first problem found, or ``None``.
    """
    for part in parts:
        if not part:
            return "Empty path component"
        if SEP in part:
            return f"Separator in component '{part}'"
        if "\0" in part:
            return f"Null byte in component {part!r}"
        if part in (".", ".."):
            return f"Disallowed path component '{part}'"
    return None


# endregion


class BlobPath:
    """A container plus a blob key within one storage account.

    Example: ``BlobPath.from_string("testcontainer/testdir/testfile.txt")`` has
    ``container == "testcontainer"``, ``path_to_file == "testdir/testfile.txt"``
    and ``path_to_file_parts == ("testdir", "testfile.txt")``.

    Equality and hashing consider only ``container`` and ``path_to_file``.
    """

    __slots__ = ("container", "full_path", "path_to_file", "path_to_file_parts")
    full_path: Final[str]  # type: ignore[misc]
    container: Final[str]  # type: ignore[misc]
    path_to_file: Final[str]  # type: ignore[misc]
    path_to_file_parts: Final[tuple[str, ...]]  # type: ignore[misc]

    def __init__(
        self,
        full_path: str = "",
        container: str = "",
        path_to_file: str = "",
        path_to_file_parts: tuple[str, ...] = (),
    ) -> None:
        object.__setattr__(self, "full_path", full_path)
        object.__setattr__(self, "container", container)
        object.__setattr__(self, "path_to_file", path_to_file)
        object.__setattr__(self, "path_to_file_parts", tuple(path_to_file_parts))

    @classmethod
    def from_string(cls, s: str) -> BlobPath:
        """Parse and validate a ``container[/segment...]`` string.

        :raises InvalidPath: If ``s`` is a URI, starts with a separator, or has
            an invalid segment.
        """
        if is_likely_uri(s):
            raise InvalidPath(
                f"Expected an Azure object path of the form 'container/path...', got a URI: '{s}'",
                path=s,
            )
        src = remove_trailing_slash(s)
        first_sep = src.find(SEP)
        if first_sep == 0:
            raise InvalidPath(f"Path cannot start with a separator ('{s}')", path=s)
        if first_sep == -1:
            return cls(src, src, "", ())
        path_to_file = src[first_sep + 1 :]
        path = cls(src, src[:first_sep], path_to_file, tuple(split_abstract_path(path_to_file)))
        path.validate()
        return path

    def validate(self) -> None:
        problem = validate_abstract_path_parts(self.path_to_file_parts)
        if problem is not None:
            raise InvalidPath(f"{problem} in path {self.full_path}", path=self.full_path)

    def has_parent(self) -> bool:
        return bool(self.path_to_file)

    def empty(self) -> bool:
        return not self.container and not self.path_to_file

    def parent(self) -> BlobPath:
        """Path with the last segment removed.

        Example: the parent of ``c/a/b`` is ``c/a``; the parent of ``c/a`` is
        the bare container ``c``.

        :raises InvalidPath: If the path has no parent (bare container).
        """
        if not self.has_parent():
            raise InvalidPath("Path has no parent", path=self.full_path)
        parts = self.path_to_file_parts[:-1]
        path_to_file = join_abstract_path(parts)
        if path_to_file:
            full_path = f"{self.container}{SEP}{path_to_file}"
        else:
            full_path = self.container
        return BlobPath(full_path, self.container, path_to_file, parts)

    @property
    def name(self) -> str:
        """Final component of the path, or the container name."""
        if self.path_to_file_parts:
            return self.path_to_file_parts[-1]
        return self.container

    def __str__(self) -> str:
        return self.full_path

    def __repr__(self) -> str:
        return f"BlobPath({self.full_path!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BlobPath):
            return self.container == other.container and self.path_to_file == other.path_to_file
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.container, self.path_to_file))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"BlobPath is immutable: cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"BlobPath is immutable: cannot delete '{name}'")


def validate_file_path(path: BlobPath) -> None:
    """Check that ``path`` can name a blob before any network call.

    :raises PathNotFound: If the container is empty.
    :raises NotAFile: If the path names only a container.
    """
    if not path.container:
        raise PathNotFound(f"Path does not exist '{path.full_path}'", path=path.full_path)
    if not path.path_to_file:
        raise NotAFile(f"Not a regular file: '{path.full_path}'", path=path.full_path)
