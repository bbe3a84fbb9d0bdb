"""
Domain models for declarative Jenkins job definitions.

Capability providers are small immutable objects, one per configuration
facet (SCM strategy, trigger, parameter, build step, publisher). Each one
writes its own subtree into a DocumentEmitter through ``emit()``.

Jobs are never constructed field-by-field by users. A configuration function
receives a JobBuilder (or a JobsBuilder for a whole collection) and declares
everything through the builder's fixed method set; the builder then freezes
the result into an immutable Job.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Union

from .emitter import DocumentEmitter
from .errors import ConfigurationError

# Schedule installed alongside a version-controlled SCM
DEFAULT_POLL_SCHEDULE = "0 * * * */20"

# A raw fragment receives the active emitter after the fixed trailer
RawFragment = Callable[[DocumentEmitter], None]


def _require_text(field_name: str, value: object) -> str:
    """Validate that a declared value is a non-empty string."""
    if not isinstance(value, str):
        raise ConfigurationError(
            field_name, f"expected a string, got {type(value).__name__}"
        )
    if not value.strip():
        raise ConfigurationError(field_name, "must not be empty")
    return value


def _require_job_name(value: object) -> str:
    """Validate a job name; it becomes a URL path segment and a file name."""
    name = _require_text("name", value)
    if "/" in name or "\\" in name:
        raise ConfigurationError("name", f"'{name}' must not contain a path separator")
    if name in (".", ".."):
        raise ConfigurationError("name", f"'{name}' is not a valid job name")
    return name


def _optional_text(field_name: str, value: object) -> str:
    """Validate a string that may be empty (None is treated as empty)."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigurationError(
            field_name, f"expected a string, got {type(value).__name__}"
        )
    return value


# ============================================================================
# SCM strategies
# ============================================================================


@dataclass(frozen=True)
class NullScm:
    """No source control."""

    def emit(self, into: DocumentEmitter) -> None:
        into.leaf("scm", attrib={"class": "hudson.scm.NullSCM"})


@dataclass(frozen=True)
class VersionControlScm:
    """
    Subversion checkout of a single location into the workspace root.

    The filter placeholders are always written, even when empty, since the
    server's SCM loader expects them to be present.
    """

    url: str

    def __post_init__(self):
        _require_text("url", self.url)

    def emit(self, into: DocumentEmitter) -> None:
        with into.element("scm", {"class": "hudson.scm.SubversionSCM"}):
            with into.element("locations"):
                with into.element("hudson.scm.SubversionSCM_-ModuleLocation"):
                    into.leaf("remote", self.url)
                    into.leaf("local", ".")
            into.leaf("excludedRegions")
            into.leaf("includedRegions")
            into.leaf("excludedUsers")
            into.leaf("excludedRevprop")
            into.leaf("excludedCommitMessages")
            into.leaf(
                "workspaceUpdater",
                attrib={"class": "hudson.scm.subversion.CheckoutUpdater"},
            )


# ============================================================================
# Triggers
# ============================================================================


@dataclass(frozen=True)
class PollingTrigger:
    """Poll the SCM on a cron-like schedule."""

    schedule: str

    def __post_init__(self):
        _require_text("schedule", self.schedule)

    def emit(self, into: DocumentEmitter) -> None:
        with into.element("hudson.triggers.SCMTrigger"):
            into.leaf("spec", self.schedule)


# ============================================================================
# Parameters
# ============================================================================


@dataclass(frozen=True)
class StringParameterDef:
    """A string build parameter with optional default and description."""

    name: str
    default: str = ""
    description: str = ""

    def __post_init__(self):
        _require_text("parameter.name", self.name)
        # Frozen dataclass: normalise None through object.__setattr__
        object.__setattr__(
            self, "default", _optional_text("parameter.default", self.default)
        )
        object.__setattr__(
            self,
            "description",
            _optional_text("parameter.description", self.description),
        )

    def emit(self, into: DocumentEmitter) -> None:
        with into.element("hudson.model.StringParameterDefinition"):
            into.leaf("name", self.name)
            into.leaf("description", self.description)
            into.leaf("defaultValue", self.default)


# ============================================================================
# Build steps
# ============================================================================


@dataclass(frozen=True)
class ShellStep:
    """Run a shell command."""

    command: str

    def __post_init__(self):
        _require_text("command", self.command)

    def emit(self, into: DocumentEmitter) -> None:
        with into.element("hudson.tasks.Shell"):
            into.leaf("command", self.command)


# ============================================================================
# Publishers
# ============================================================================


@dataclass(frozen=True)
class ArtifactArchiver:
    """Archive build artifacts matching a glob pattern set."""

    patterns: str

    def __post_init__(self):
        _require_text("artifacts", self.patterns)

    def emit(self, into: DocumentEmitter) -> None:
        with into.element("hudson.tasks.ArtifactArchiver"):
            into.leaf("artifacts", self.patterns)
            into.leaf("latestOnly", False)


@dataclass(frozen=True)
class DownstreamTrigger:
    """
    Trigger another job on success, passing predefined parameters.

    ``properties_text`` is newline-delimited key=value text handed to the
    downstream job unchanged.
    """

    target_job_name: str
    properties_text: str = ""

    def __post_init__(self):
        _require_text("trigger.job_name", self.target_job_name)
        object.__setattr__(
            self,
            "properties_text",
            _optional_text("trigger.properties", self.properties_text),
        )

    def emit(self, into: DocumentEmitter) -> None:
        prefix = "hudson.plugins.parameterizedtrigger"
        with into.element(f"{prefix}.BuildTrigger"):
            with into.element("configs"):
                with into.element(f"{prefix}.BuildTriggerConfig"):
                    with into.element("configs"):
                        with into.element(f"{prefix}.PredefinedBuildParameters"):
                            into.leaf("properties", self.properties_text)
                    into.leaf("projects", self.target_job_name)
                    into.leaf("condition", "SUCCESS")
                    into.leaf("triggerWithNoParameters", False)


Scm = Union[NullScm, VersionControlScm]
Trigger = PollingTrigger
BuildStep = ShellStep
Publisher = DownstreamTrigger


# ============================================================================
# Job
# ============================================================================


@dataclass(frozen=True)
class Job:
    """
    One CI pipeline stage's full configuration.

    Jobs are immutable; create them with JobBuilder or Jobs.from_config().
    """

    name: str
    workspace: str | None = None
    parameters: tuple[StringParameterDef, ...] = ()
    scm: Scm = field(default_factory=NullScm)
    triggers: tuple[Trigger, ...] = ()
    builders: tuple[BuildStep, ...] = ()
    publishers: tuple[Publisher, ...] = ()
    artifacts: tuple[ArtifactArchiver, ...] = ()
    raws: tuple[RawFragment, ...] = ()

    def __post_init__(self):
        _require_job_name(self.name)

    def to_summary_dict(self) -> dict:
        """Convert job to summary format (for listings)."""
        return {
            "name": self.name,
            "workspace": self.workspace,
            "scm": type(self.scm).__name__,
            "parameters": [p.name for p in self.parameters],
            "builders": len(self.builders),
            "triggers": len(self.triggers),
            "publishers": len(self.artifacts) + len(self.publishers),
        }


class JobBuilder:
    """
    Collects declarations for a single job.

    Every method appends in declaration order and returns the builder so
    calls can be chained.
    """

    def __init__(self, name: str):
        self.name = _require_job_name(name)
        self._workspace: str | None = None
        self._parameters: list[StringParameterDef] = []
        self._scm: Scm = NullScm()
        self._triggers: list[Trigger] = []
        self._builders: list[BuildStep] = []
        self._publishers: list[Publisher] = []
        self._artifacts: list[ArtifactArchiver] = []
        self._raws: list[RawFragment] = []

    def sh(self, command: str) -> "JobBuilder":
        """Add a shell build step."""
        self._builders.append(ShellStep(command))
        return self

    def artifacts(self, patterns: str) -> "JobBuilder":
        """Archive artifacts matching ``patterns`` (one archiver per call)."""
        self._artifacts.append(ArtifactArchiver(patterns))
        return self

    def subversion(self, url: str) -> "JobBuilder":
        """Check out ``url`` and poll it on the default schedule."""
        self._scm = VersionControlScm(url)
        self._triggers.append(PollingTrigger(DEFAULT_POLL_SCHEDULE))
        return self

    def parameter(
        self, name: str, default: str = "", description: str = ""
    ) -> "JobBuilder":
        """Declare a string build parameter."""
        self._parameters.append(StringParameterDef(name, default, description))
        return self

    def parameterised_trigger(self, job_name: str, properties: str) -> "JobBuilder":
        """Trigger ``job_name`` on success with key=value ``properties``."""
        self._publishers.append(DownstreamTrigger(job_name, properties))
        return self

    def workspace(self, path: str) -> "JobBuilder":
        """Use a custom workspace directory."""
        self._workspace = _require_text("workspace", path)
        return self

    def raw(self, fragment: RawFragment) -> "JobBuilder":
        """Append an emit-time fragment, written after all fixed sections."""
        if not callable(fragment):
            raise ConfigurationError("raw", "fragment must be callable")
        self._raws.append(fragment)
        return self

    def build(self) -> Job:
        return Job(
            name=self.name,
            workspace=self._workspace,
            parameters=tuple(self._parameters),
            scm=self._scm,
            triggers=tuple(self._triggers),
            builders=tuple(self._builders),
            publishers=tuple(self._publishers),
            artifacts=tuple(self._artifacts),
            raws=tuple(self._raws),
        )


# ============================================================================
# Jobs collection
# ============================================================================


class JobsBuilder:
    """Collects job declarations for a Jobs collection."""

    def __init__(self):
        self._entries: list[tuple[str, Job]] = []
        self._names: set[str] = set()

    def job(self, name: str, configure: Callable[[JobBuilder], object]) -> Job:
        """
        Declare a job.

        Args:
            name: Unique job name
            configure: Called once with the job's JobBuilder

        Returns:
            The built Job

        Raises:
            ConfigurationError: If the name is empty, contains a path
                                separator, is "." or "..", or is already declared
        """
        builder = JobBuilder(name)
        if name in self._names:
            raise ConfigurationError("name", f"duplicate job name '{name}'")
        configure(builder)
        job = builder.build()
        self._entries.append((name, job))
        self._names.add(name)
        return job

    def build(self) -> "Jobs":
        return Jobs(self._entries)


class Jobs:
    """
    Ordered, name-indexed collection of jobs.

    Iteration follows declaration order, which is also the publish order.
    """

    def __init__(self, entries: list[tuple[str, Job]] | None = None):
        self._entries: list[tuple[str, Job]] = []
        self._index: dict[str, Job] = {}
        for name, job in entries or []:
            if name in self._index:
                raise ConfigurationError("name", f"duplicate job name '{name}'")
            self._entries.append((name, job))
            self._index[name] = job

    @classmethod
    def from_config(cls, configure: Callable[[JobsBuilder], object]) -> "Jobs":
        """Evaluate a configuration function once and freeze its jobs."""
        builder = JobsBuilder()
        configure(builder)
        return builder.build()

    def items(self) -> list[tuple[str, Job]]:
        return list(self._entries)

    def names(self) -> list[str]:
        return [name for name, _ in self._entries]

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __getitem__(self, name: str) -> Job:
        return self._index[name]

    def __repr__(self) -> str:
        return f"Jobs({self.names()!r})"
