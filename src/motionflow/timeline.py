"""Master timeline — scenes laid end to end by their estimated durations.

    timeline = Timeline(scenes)
    index, offset = timeline.locate(12.5)   # which scene, how far into it

Scene transitions don't overlap scenes in time. A scene whose flow opens
with fade/slide/zoom is drawn over the final frame of the previous scene
while that transition runs; transition_progress() reports how far along
it is and transition_state() what the incoming scene should look like.
"""

from bisect import bisect_right


class Timeline:
    def __init__(self, scenes):
        self.scenes = list(scenes)
        self.starts = []
        total = 0.0
        for scene in self.scenes:
            self.starts.append(total)
            total += max(scene.duration, 0.0)
        self.total_duration = total

    def __len__(self):
        return len(self.scenes)

    def start_of(self, index: int) -> float:
        return self.starts[index]

    def locate(self, t: float) -> tuple[int, float]:
        """Map a master time to (scene index, offset into that scene).

        Times past the end land in the last scene; negative times at 0.
        """
        if not self.scenes:
            raise ValueError("Timeline has no scenes")
        t = max(t, 0.0)
        index = bisect_right(self.starts, t) - 1
        # Zero-length scenes share a start with their successor.
        while index < len(self.scenes) - 1 and t >= self.starts[index] + self.scenes[index].duration:
            index += 1
        return index, t - self.starts[index]


def transition_progress(scene, offset: float, index: int | None = None) -> float | None:
    """Progress in [0, 1] of the scene's leading transition at offset.

    None when there's nothing to draw: no transition, the first scene of
    the timeline (index 0), or offset already past the transition.
    """
    transition = scene.estimate.transition
    if transition is None:
        return None
    if (scene.index - 1 if index is None else index) == 0:
        return None
    if offset >= transition.duration:
        return None
    if transition.duration <= 0:
        return 1.0
    return min(max(offset / transition.duration, 0.0), 1.0)


def transition_state(transition_type: str, progress: float) -> dict:
    """Renderer-facing look of an incoming scene at transition progress.

    Keys: opacity, scale, x (horizontal offset in percent of the width).
    """
    if transition_type == "fade":
        return {"opacity": progress, "scale": 1.0, "x": 0.0}
    if transition_type == "slide":
        return {"opacity": 1.0, "scale": 1.0, "x": (1 - progress) * 100}
    if transition_type == "zoom":
        return {"opacity": progress, "scale": 0.5 + 0.5 * progress, "x": 0.0}
    return {"opacity": 1.0, "scale": 1.0, "x": 0.0}
