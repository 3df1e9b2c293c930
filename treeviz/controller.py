"""
╔══════════════════════════════════════════════════════════════════╗
║                treeviz — Animation Controller                    ║
║                                                                  ║
║  Headless playback state machine over a finished storyboard.     ║
║  It never runs algorithm code: scrubbing only changes which      ║
║  already-recorded Scene is displayed.                            ║
║                                                                  ║
║          start(scenes)                                           ║
║   IDLE ───────────────► ANIMATING ──(last scene reached)──► IDLE ║
║                          │    ▲                                  ║
║                 pause    ▼    │ play                             ║
║                        PAUSED                                    ║
║                                                                  ║
║  The timer lives outside (tkinter ``after()`` in the player);    ║
║  it calls ``tick()`` every ``interval_ms`` while playing.        ║
║  ``is_animating`` is the gate the session checks before it       ║
║  runs a new operation.                                           ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
from typing import Callable, List, Optional

from treeviz import notices
from treeviz.scene import Scene, Toast

logger = logging.getLogger(__name__)

ANIMATION_INTERVAL = 750        # ms per step at speed 3
MIN_SPEED, MAX_SPEED = 1, 5


def clamp_speed(speed) -> int:
    return max(MIN_SPEED, min(MAX_SPEED, int(speed)))


class AnimationController:
    """
    Step / play / pause / scrub over a list of Scenes.

    Attributes:
        scenes        (list[Scene]): Storyboard being played.
        current_step  (int)        : Index of the displayed scene.
        is_animating  (bool)       : A storyboard has not reached its end.
        is_playing    (bool)       : tick() advances.
        auto_play     (bool)       : start() begins playing immediately.
        speed         (int)        : 1 (slow) … 5 (fast).
        base_scene    (Scene)      : Shown when no storyboard is loaded.
        on_notice     (callable)   : Receives every Toast to display.
    """

    def __init__(self, base_scene: Optional[Scene] = None, auto_play: bool = True,
                 speed: int = 3, on_notice: Optional[Callable[[Toast], None]] = None):
        self.scenes: List[Scene] = []
        self.current_step = 0
        self.is_animating = False
        self.is_playing   = False
        self.auto_play    = auto_play
        self.speed        = clamp_speed(speed)
        self.base_scene   = base_scene if base_scene is not None else Scene()
        self.on_notice    = on_notice

    # ── derived state ───────────────────────────────────────────
    @property
    def current_scene(self) -> Scene:
        if self.scenes:
            return self.scenes[self.current_step]
        return self.base_scene

    @property
    def total_steps(self) -> int:
        return len(self.scenes) - 1 if self.scenes else 0

    @property
    def can_step_forward(self) -> bool:
        return self.current_step < len(self.scenes) - 1

    @property
    def can_step_back(self) -> bool:
        return self.current_step > 0

    @property
    def interval_ms(self) -> int:
        return int(ANIMATION_INTERVAL * (1.75 - self.speed * 0.25))

    def set_speed(self, speed) -> None:
        self.speed = clamp_speed(speed)

    def notify(self, toast: Toast) -> None:
        logger.debug("notice: %s: %s", toast.title, toast.description)
        if self.on_notice is not None:
            self.on_notice(toast)

    # ─────────────────────────────────────────────────────────────
    #  LOADING
    # ─────────────────────────────────────────────────────────────

    def start(self, scenes) -> bool:
        """
        Load a new storyboard.

        Returns:
            bool: False (and a busy notice) if one is still animating.
        """
        if self.is_animating:
            self.notify(notices.busy())
            return False
        self.scenes = list(scenes)
        self.current_step = 0
        self.is_playing = False
        if not self.scenes:
            return True
        self.is_animating = True
        if self.auto_play and len(self.scenes) > 1:
            self.is_playing = True
        self._land()
        return True

    def reset_to_scene(self, scene: Scene) -> None:
        """Drop any storyboard and show ``scene`` as the resting state."""
        self.base_scene   = scene
        self.scenes       = []
        self.current_step = 0
        self.is_animating = False
        self.is_playing   = False

    def _land(self) -> None:
        # toasts fire only while the storyboard is live, not on re-scrubs
        if not self.is_animating:
            return
        scene = self.scenes[self.current_step]
        if scene.toast is not None:
            self.notify(scene.toast)
        if self.current_step >= len(self.scenes) - 1:
            self.base_scene   = scene
            self.is_animating = False
            self.is_playing   = False

    # ─────────────────────────────────────────────────────────────
    #  PLAYBACK
    # ─────────────────────────────────────────────────────────────

    def tick(self) -> bool:
        """
        Advance one step if playing.

        Returns:
            bool: True if the displayed scene changed.
        """
        if not self.is_playing:
            return False
        if not self.can_step_forward:
            self.is_playing = False
            return False
        self.current_step += 1
        self._land()
        return True

    def toggle_play_pause(self) -> None:
        if not self.can_step_forward:
            self.is_playing = False
            return
        self.is_playing = not self.is_playing

    def go_to_step(self, step: int) -> None:
        """Jump to ``step`` and pause; out-of-range indices are ignored."""
        if 0 <= step < len(self.scenes):
            self.current_step = step
            self.is_playing = False
            self._land()

    def step_forward(self) -> None:
        if self.can_step_forward:
            self.go_to_step(self.current_step + 1)

    def step_back(self) -> None:
        if self.can_step_back:
            self.go_to_step(self.current_step - 1)

    def rewind(self) -> None:
        self.go_to_step(0)

    def fast_forward(self) -> None:
        self.go_to_step(len(self.scenes) - 1)
