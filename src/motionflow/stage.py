"""Stage — the explicit registry of animatable targets for one scene mount.

Flows reach their targets through the stage instead of global names:

    stage = Stage.from_view({"title": "opacity-0 translate-y-10"}, apply=sink)
    task = Task(flow(stage))

    # inside the flow
    yield from stage.title("opacity-100 translate-y-0", 1.5)
    yield from stage["status"].text("Sorted!", 0.5)

Each mount builds its own Stage, so two previews of the same scene never
share state. The stage talks to the host through two callbacks:

  - apply(target_id, property, serialized_value): the render sink.
  - read_current(target_id, key): the environment's current value for a
    property (a number, a color, a CSS string, or None when unknown).
    Without it the stage reads the values the target's class tokens set.

It also retains the last value it applied to every property, which the
value resolver prefers over the environment so an interrupted animation
resumes from where it visually is.
"""

from typing import Callable

from .animate import animate, type_text
from .resolver import value_from_classes
from .tokens import split_tokens

ApplySink = Callable[[str, str, str], None]
CurrentSource = Callable[[str, str], object]


class Target:
    """One animatable element: its id, class tokens and applied values."""

    def __init__(self, stage: "Stage", target_id: str, classes: str = ""):
        self.stage = stage
        self.id = target_id
        self.classes = split_tokens(classes)
        self.applied: dict[str, object] = {}
        self._initial_classes = list(self.classes)

    def has_class_prefix(self, prefix: str) -> bool:
        return any(c.startswith(prefix) for c in self.classes)

    def find_class(self, prefix: str) -> str | None:
        return next((c for c in self.classes if c.startswith(prefix)), None)

    def add_class(self, token: str) -> None:
        if token not in self.classes:
            self.classes.append(token)
            self.stage.emit(self.id, "class", " ".join(self.classes))

    def read(self, key: str):
        return self.stage.read_current(self.id, key)

    def reset(self) -> None:
        """Forget applied values and restore the declared classes."""
        self.applied.clear()
        if self.classes != self._initial_classes:
            self.classes = list(self._initial_classes)
            self.stage.emit(self.id, "class", " ".join(self.classes))

    def __repr__(self):
        return f"Target({self.id!r}, classes={' '.join(self.classes)!r})"


class TargetRef:
    """A late-bound handle to a target id.

    Resolved when the returned animation starts, not when the flow builds
    it; an id with no registered target turns into a no-op.
    """

    def __init__(self, stage: "Stage", target_id: str):
        self.stage = stage
        self.id = target_id

    def __call__(self, *args, easing=None):
        return animate(self.stage, self.id, *args, easing=easing)

    def text(self, content: str, duration: float):
        return type_text(self.stage, self.id, content, duration)


class Stage:
    def __init__(
        self,
        apply: ApplySink | None = None,
        read_current: CurrentSource | None = None,
    ):
        self._apply = apply
        self._read_current = read_current
        self._targets: dict[str, Target] = {}

    @classmethod
    def from_view(cls, view: dict[str, str] | None, **kwargs) -> "Stage":
        """Build a stage with one target per entry of a view mapping.

        view maps target id → the class tokens the target starts with.
        """
        stage = cls(**kwargs)
        for target_id, classes in (view or {}).items():
            stage.register(target_id, classes or "")
        return stage

    # ── Registry ──────────────────────────────────────────────────

    def register(self, target_id: str, classes: str = "") -> Target:
        check_target_id(target_id)
        target = Target(self, target_id, classes)
        self._targets[target_id] = target
        return target

    def get(self, target_id: str) -> Target | None:
        return self._targets.get(target_id)

    def reset(self) -> None:
        """Return every target to its declared state before a replay."""
        for target in self._targets.values():
            target.reset()

    @property
    def target_ids(self) -> list[str]:
        return list(self._targets)

    def __contains__(self, target_id: str) -> bool:
        return target_id in self._targets

    def __getitem__(self, target_id: str) -> TargetRef:
        return TargetRef(self, target_id)

    def __getattr__(self, name: str) -> TargetRef:
        if name.startswith("_"):
            raise AttributeError(name)
        return TargetRef(self, name)

    # ── Host callbacks ────────────────────────────────────────────

    def apply(self, target: Target, key: str, value, prop: str, serialized: str) -> None:
        """Retain value under key and hand the serialized form to the sink."""
        target.applied[key] = value
        self.emit(target.id, prop, serialized)

    def emit(self, target_id: str, prop: str, serialized: str) -> None:
        if self._apply is not None:
            self._apply(target_id, prop, serialized)

    def read_current(self, target_id: str, key: str):
        if self._read_current is not None:
            return self._read_current(target_id, key)
        target = self._targets.get(target_id)
        if target is None:
            return None
        return value_from_classes(target.classes, key)


def check_target_id(target_id: str) -> None:
    """Raise ValueError when stage.<target_id> would not reach the target.

    Ids that name a Stage member ("reset", "get", ...) resolve to that
    member under attribute access.
    """
    if hasattr(Stage, target_id):
        raise ValueError(
            f'Target id "{target_id}" clashes with Stage.{target_id}, '
            f"so stage.{target_id} would not reach it. Please rename the target."
        )
