"""
╔══════════════════════════════════════════════════════════════════╗
║                 treeviz — Settings (user preferences)            ║
║                                                                  ║
║  Saved as JSON in the user's home directory so they survive      ║
║  across sessions.  Stores theme choice, playback speed,          ║
║  auto-play and any per-colour overrides.                         ║
╚══════════════════════════════════════════════════════════════════╝
"""

import json
import logging
import os

from treeviz.controller import clamp_speed

logger = logging.getLogger(__name__)


THEMES = {
    "dark": {
        "BG": "#1e1e2e",  "BG2": "#2a2a3d",  "FG": "#cdd6f4",
        "ACCENT": "#89b4fa",  "GREEN_C": "#a6e3a1",  "RED_C": "#f38ba8",
        "YELLOW_C": "#f9e2af", "BTN_BG": "#45475a",  "CANVAS_BG": "#1e1e2e",
        "NODE_FILL": "#585b70",  "NODE_TEXT": "#ffffff",  "EDGE": "#7f849c",
        "HIGHLIGHT": "#f9e2af",  "DELETION": "#f38ba8",  "VISITOR": "#89b4fa",
        "TOAST_BG": "#313244",  "TOAST_ERR": "#f38ba8",
    },
    "light": {
        "BG": "#eff1f5",  "BG2": "#dce0e8",  "FG": "#4c4f69",
        "ACCENT": "#1e66f5",  "GREEN_C": "#40a02b",  "RED_C": "#d20f39",
        "YELLOW_C": "#df8e1d", "BTN_BG": "#ccd0da",  "CANVAS_BG": "#e6e9ef",
        "NODE_FILL": "#4c4f69",  "NODE_TEXT": "#ffffff",  "EDGE": "#8c8fa1",
        "HIGHLIGHT": "#df8e1d",  "DELETION": "#d20f39",  "VISITOR": "#1e66f5",
        "TOAST_BG": "#bcc0cc",  "TOAST_ERR": "#d20f39",
    },
}

DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".treeviz.json")


class Settings:
    """
    Persistent user preferences manager.

    Attributes:
        theme         (str) : Active theme name ("dark" / "light").
        anim_speed    (int) : Playback speed, 1 (slow) … 5 (fast).
        auto_play     (bool): Start playing as soon as an operation ran.
        custom_colors (dict): Key→hex overrides on top of the theme.

    File location: ``~/.treeviz.json`` unless ``path`` is given.
    """

    def __init__(self, path=None):
        self.path          = path or os.environ.get("TREEVIZ_SETTINGS", DEFAULT_PATH)
        self.theme         = "dark"
        self.anim_speed    = 3
        self.auto_play     = True
        self.custom_colors = {}
        self._load()

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read settings JSON; a missing file keeps defaults, a broken one is logged."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable settings file %s: %s", self.path, e)
            return
        self.theme         = d.get("theme", "dark")
        self.anim_speed    = clamp_speed(d.get("anim_speed", 3))
        self.auto_play     = bool(d.get("auto_play", True))
        self.custom_colors = dict(d.get("custom_colors", {}))

    # ── Save to disk ────────────────────────────────────────────
    def save(self):
        with open(self.path, "w") as f:
            json.dump({"theme": self.theme,
                       "anim_speed": self.anim_speed,
                       "auto_play": self.auto_play,
                       "custom_colors": self.custom_colors}, f, indent=2)
        logger.info("settings saved to %s", self.path)

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"

        Args:
            key (str): Colour key, e.g. "BG", "HIGHLIGHT".

        Returns:
            str: Hex colour string.
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES.get(self.theme, THEMES["dark"]).get(key, "#ffffff")

    # ── Theme switching ─────────────────────────────────────────
    def toggle_theme(self):
        """Flip between the dark and light themes; returns the new name."""
        self.theme = "light" if self.theme == "dark" else "dark"
        logger.info("theme switched to %s", self.theme)
        return self.theme

    def reset_colors(self):
        """Drop every custom colour override so the theme applies cleanly."""
        self.custom_colors.clear()
