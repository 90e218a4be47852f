"""Source kind color map."""

from helm_dependency_fetch.models import SourceKind

SOURCE_COLORS: dict[SourceKind, str] = {
    SourceKind.REMOTE: "cyan",
    SourceKind.LOCAL: "yellow",
}


def styled_source(kind: SourceKind) -> str:
    color = SOURCE_COLORS.get(kind, "white")
    return f"[{color}]{kind.value}[/{color}]"
