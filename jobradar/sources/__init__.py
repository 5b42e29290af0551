from .base import CandidateSource
from .json_file import JsonFileSource
from .mock import MockSource
from .remotive import RemotiveSource

from jobradar.log import get_logger

log = get_logger(__name__)

__all__ = [
    "CandidateSource", "JsonFileSource", "MockSource", "RemotiveSource",
    "SOURCES", "get_sources",
]

SOURCES: dict[str, type[CandidateSource]] = {
    "remotive": RemotiveSource,
    "file": JsonFileSource,
    "mock": MockSource,
}


def get_sources(settings: dict, platform: str = "all") -> list[CandidateSource]:
    """Instantiate enabled sources; *platform* restricts to a single named source."""
    if platform != "all":
        names = [platform]
    else:
        names = [str(n).lower() for n in settings.get("sources", [])]

    sources: list[CandidateSource] = []
    for name in names:
        cls = SOURCES.get(name)
        if cls is None:
            log.warning("Unknown source %r (known: %s)", name, ", ".join(SOURCES))
            continue
        sources.append(cls(settings))
        log.info("Registered source: %s", name)

    if not sources:
        sources.append(MockSource(settings))
        log.info("No sources enabled — using MockSource")
    return sources
