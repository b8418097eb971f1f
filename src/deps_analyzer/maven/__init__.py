"""Maven process invocation and output scraping."""

from deps_analyzer.maven.invoker import InvocationResult, MavenInvoker, launcher_name, resolve_maven_executable
from deps_analyzer.maven.scrape import DEFAULT_MARKERS, extract_artifact_paths

__all__ = [
    "InvocationResult",
    "MavenInvoker",
    "launcher_name",
    "resolve_maven_executable",
    "DEFAULT_MARKERS",
    "extract_artifact_paths",
]
