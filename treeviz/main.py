"""
╔══════════════════════════════════════════════════════════════════╗
║                 treeviz — Player window (tkinter)                ║
║                                                                  ║
║  Run     : python -m treeviz                                     ║
║                                                                  ║
║  ┌──────────────┐  run op   ┌────────────────┐  scenes           ║
║  │  Controls    │ ───────►  │ VisualizerSess │ ─────────┐        ║
║  └──────────────┘           └────────────────┘          ▼        ║
║  ┌──────────────┐  draw     ┌────────────────┐  tick() ┌──────┐  ║
║  │  Canvas      │ ◄──────── │ PlayerWindow   │ ◄────── │ Ctrl │  ║
║  └──────────────┘           └────────────────┘         └──────┘  ║
║                                                                  ║
║  The window owns no algorithm state: it asks the session to run  ║
║  an operation, then redraws ``controller.current_scene`` on      ║
║  every tick scheduled with ``after()``.                          ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
import os
from tkinter import (
    Tk, Frame, Canvas, Label, Entry, Button, Scale, StringVar,
    Radiobutton, Checkbutton, BooleanVar,
    LEFT, RIGHT, TOP, BOTTOM, BOTH, X, HORIZONTAL,
    messagebox, filedialog,
)

from treeviz.controller import AnimationController, MAX_SPEED, MIN_SPEED
from treeviz.errors import TreeVizError
from treeviz.export import PDFExporter, VideoExporter, describe
from treeviz.layout import LayoutConfig
from treeviz.session import HEAP_SEED_VALUES, VisualizerSession
from treeviz.settings import Settings

logger = logging.getLogger(__name__)

MIN_VALUE, MAX_VALUE = 0, 999
CANVAS_W, CANVAS_H = 900, 480
NODE_R = 20


def parse_values(text):
    """
    Parse a string of comma/space separated integers.

    Tokens that are not integers in [0, 999] are returned separately
    so the caller can complain about them.

    Returns:
        tuple[list[int], list[str]]: (values, rejected_tokens)

    Examples:
        >>> parse_values("7, 3, 18, abc, 1000")
        ([7, 3, 18], ['abc', '1000'])
    """
    values, rejected = [], []
    for token in text.replace(",", " ").split():
        try:
            v = int(token)
        except ValueError:
            rejected.append(token)
            continue
        if MIN_VALUE <= v <= MAX_VALUE:
            values.append(v)
        else:
            rejected.append(token)
    return values, rejected


class PlayerWindow(Tk):
    """Main window: structure picker, operations, playback, export."""

    def __init__(self, settings=None):
        super().__init__()
        self.settings = settings or Settings()
        self.title("treeviz — BST / Splay / Heap visualizer")
        self.configure(bg=self.settings.get("BG"))
        self.after_id = None

        self.kind_var   = StringVar(value="bst")
        self.value_var  = StringVar()
        self.status_var = StringVar(value="Ready.")
        self.auto_var   = BooleanVar(value=self.settings.auto_play)

        self.controller = AnimationController(
            auto_play=self.settings.auto_play,
            speed=self.settings.anim_speed,
            on_notice=self._show_toast)
        self.session = self._new_session("bst")

        self._build_ui()
        self._redraw()
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    # ═════════════════════════════════════════════════════════════
    #  SESSION
    # ═════════════════════════════════════════════════════════════

    def _new_session(self, kind):
        seed = HEAP_SEED_VALUES if kind == "heap" else ()
        return VisualizerSession(
            kind, controller=self.controller,
            layout_config=LayoutConfig(width=CANVAS_W),
            initial_values=seed)

    def _on_kind_change(self):
        if self.controller.is_animating:
            messagebox.showwarning("Busy", "Wait for the current animation to finish.")
            self.kind_var.set(self.session.kind)
            return
        self.session = self._new_session(self.kind_var.get())
        self._redraw()

    # ═════════════════════════════════════════════════════════════
    #  UI
    # ═════════════════════════════════════════════════════════════

    def _btn(self, parent, text, cmd, color):
        b = Button(parent, text=text, command=cmd, bg=color,
                   fg=self.settings.get("BG"), relief="flat", padx=8, pady=3,
                   font=("Consolas", 10, "bold"))
        b.pack(side=LEFT, padx=3)
        return b

    def _build_ui(self):
        s = self.settings
        bg, fg = s.get("BG"), s.get("FG")

        # ── row 1: structure + value entry + operations ──
        top = Frame(self, bg=bg)
        top.pack(side=TOP, fill=X, padx=8, pady=6)
        for kind, label in (("bst", "BST"), ("splay", "Splay"), ("heap", "Min-Heap")):
            Radiobutton(top, text=label, value=kind, variable=self.kind_var,
                        command=self._on_kind_change, bg=bg, fg=fg,
                        selectcolor=s.get("BG2")).pack(side=LEFT)
        Label(top, text="  Value(s):", bg=bg, fg=fg).pack(side=LEFT)
        entry = Entry(top, textvariable=self.value_var, width=16)
        entry.pack(side=LEFT, padx=4)
        entry.bind("<Return>", lambda e: self._on_op("insert"))
        self._btn(top, "Insert", lambda: self._on_op("insert"), s.get("GREEN_C"))
        self._btn(top, "Delete", lambda: self._on_op("delete"), s.get("RED_C"))
        self._btn(top, "Search", lambda: self._on_op("search"), s.get("ACCENT"))
        self._btn(top, "Extract Min", self._on_extract, s.get("YELLOW_C"))
        self._btn(top, "Random", self._on_random, s.get("BTN_BG"))
        self._btn(top, "Clear", self._on_clear, s.get("BTN_BG"))

        # ── canvas ──
        self.canvas = Canvas(self, width=CANVAS_W, height=CANVAS_H,
                             bg=s.get("CANVAS_BG"), highlightthickness=0)
        self.canvas.pack(fill=BOTH, expand=True, padx=8)

        # ── row 2: playback ──
        bar = Frame(self, bg=bg)
        bar.pack(side=TOP, fill=X, padx=8, pady=4)
        self._btn(bar, "⏮", self._rewind, s.get("BTN_BG"))
        self._btn(bar, "◀", self._prev, s.get("BTN_BG"))
        self.play_btn = self._btn(bar, "▶ Play", self._toggle_play, s.get("GREEN_C"))
        self._btn(bar, "▶", self._next, s.get("BTN_BG"))
        self._btn(bar, "⏭", self._go_end, s.get("BTN_BG"))
        Checkbutton(bar, text="Auto-play", variable=self.auto_var,
                    command=self._on_auto_toggle, bg=bg, fg=fg,
                    selectcolor=s.get("BG2")).pack(side=LEFT, padx=6)
        Label(bar, text="Speed", bg=bg, fg=fg).pack(side=LEFT)
        self.speed_scale = Scale(bar, from_=MIN_SPEED, to=MAX_SPEED, orient=HORIZONTAL,
                                 command=self._on_speed, bg=bg, fg=fg,
                                 highlightthickness=0, length=100)
        self.speed_scale.set(self.controller.speed)
        self.speed_scale.pack(side=LEFT)
        self._btn(bar, "PDF", self._export_pdf, s.get("BTN_BG"))
        self._btn(bar, "GIF/MP4", self._export_video, s.get("BTN_BG"))
        self._btn(bar, "Theme", self._toggle_theme, s.get("ACCENT"))
        self._btn(bar, "Reset Colours", self._reset_colors, s.get("BTN_BG"))

        # ── row 3: timeline + status ──
        self.timeline = Scale(self, from_=0, to=0, orient=HORIZONTAL,
                              command=self._on_timeline, bg=bg, fg=fg,
                              highlightthickness=0, showvalue=False)
        self.timeline.pack(fill=X, padx=8)
        self.step_label = Label(self, text="Step 0 / 0", bg=bg, fg=fg, anchor="w")
        self.step_label.pack(fill=X, padx=8)
        self.status = Label(self, textvariable=self.status_var, bg=s.get("BG2"),
                            fg=fg, anchor="w", font=("Consolas", 10))
        self.status.pack(side=BOTTOM, fill=X)

    # ═════════════════════════════════════════════════════════════
    #  OPERATIONS
    # ═════════════════════════════════════════════════════════════

    def _on_op(self, op):
        values, rejected = parse_values(self.value_var.get())
        if rejected:
            messagebox.showwarning("Invalid input",
                f"Ignored: {', '.join(rejected)}\nValues must be integers {MIN_VALUE}–{MAX_VALUE}.")
        if not values:
            return
        # one operation per animation; extra values are dropped with a notice
        if len(values) > 1 and op != "insert":
            self.status_var.set(f"Only {values[0]} used; one {op} at a time.")
        if op == "insert" and len(values) > 1 and not self.controller.is_animating:
            self.session.structure.load(values[:-1])
            self.controller.reset_to_scene(self.session.layout_scene())
        getattr(self.session, op)(values[-1] if op == "insert" else values[0])
        self.value_var.set("")
        self._after_run()

    def _on_extract(self):
        self.session.extract_min()
        self._after_run()

    def _on_random(self):
        self.session.add_random()
        self._redraw()

    def _on_clear(self):
        self.session.clear()
        self._redraw()

    def _after_run(self):
        self.timeline.config(to=self.controller.total_steps)
        self._redraw()
        self._schedule()

    # ═════════════════════════════════════════════════════════════
    #  PLAYBACK
    # ═════════════════════════════════════════════════════════════

    def _cancel(self):
        if self.after_id:
            self.after_cancel(self.after_id)
            self.after_id = None

    def _schedule(self):
        self._cancel()
        if self.controller.is_playing:
            self.after_id = self.after(self.controller.interval_ms, self._auto_step)

    def _auto_step(self):
        self.after_id = None
        if self.controller.tick():
            self._redraw()
        self._schedule()

    def _toggle_play(self):
        self.controller.toggle_play_pause()
        self._redraw()
        self._schedule()

    def _nav(self, action):
        action()
        self._cancel()
        self._redraw()

    def _prev(self):
        self._nav(self.controller.step_back)

    def _next(self):
        self._nav(self.controller.step_forward)

    def _rewind(self):
        self._nav(self.controller.rewind)

    def _go_end(self):
        self._nav(self.controller.fast_forward)

    def _on_timeline(self, val):
        idx = int(float(val))
        if idx != self.controller.current_step:
            self._nav(lambda: self.controller.go_to_step(idx))

    def _on_speed(self, val):
        self.controller.set_speed(int(float(val)))
        self.settings.anim_speed = self.controller.speed

    def _on_auto_toggle(self):
        self.controller.auto_play = self.auto_var.get()
        self.settings.auto_play = self.controller.auto_play

    def _show_toast(self, toast):
        self.status_var.set(f"{toast.title}: {toast.description}")
        self.status.config(fg=self.settings.get("TOAST_ERR") if toast.destructive
                           else self.settings.get("FG"))

    # ═════════════════════════════════════════════════════════════
    #  DRAWING
    # ═════════════════════════════════════════════════════════════

    def _redraw(self):
        s, c = self.settings, self.canvas
        scene = self.controller.current_scene
        c.delete("all")

        ctl = self.controller
        total = len(ctl.scenes)
        self.step_label.config(
            text=f"Step {ctl.current_step + 1 if total else 0} / {total}   {describe(scene)}")
        self.timeline.set(ctl.current_step)
        self.play_btn.config(text="⏸ Pause" if ctl.is_playing else "▶ Play",
                             bg=s.get("RED_C") if ctl.is_playing else s.get("GREEN_C"))

        pos = {n.id: (n.x, n.y) for n in scene.nodes}
        for e in scene.visible_edges():
            if e.source in pos and e.target in pos:
                c.create_line(*pos[e.source], *pos[e.target], fill=s.get("EDGE"), width=2)

        for n in scene.visible_nodes():
            x, y = pos[n.id]
            style = scene.node_style(n.id)
            fill, outline, ow = s.get("NODE_FILL"), "white", 1
            if style.highlight == "deletion":
                fill = s.get("DELETION")
            elif style.highlight == "default":
                outline, ow = s.get("HIGHLIGHT"), 3
            if n.id == scene.visitor_node_id:
                c.create_oval(x - NODE_R - 5, y - NODE_R - 5, x + NODE_R + 5, y + NODE_R + 5,
                              outline=s.get("VISITOR"), width=3)
            c.create_oval(x - NODE_R, y - NODE_R, x + NODE_R, y + NODE_R,
                          fill=fill, outline=outline, width=ow)
            c.create_text(x, y, text=str(n.value), fill=s.get("NODE_TEXT"),
                          font=("Consolas", 11, "bold"))
            if n.tag is not None:
                c.create_text(x, y + NODE_R + 8, text=str(n.tag), fill=s.get("FG"),
                              font=("Consolas", 8))

        if not scene.nodes:
            c.create_text(CANVAS_W // 2, CANVAS_H // 2, text="Empty — insert a value",
                          font=("Consolas", 14), fill=s.get("FG"))

    # ═════════════════════════════════════════════════════════════
    #  EXPORT
    # ═════════════════════════════════════════════════════════════

    def _scenes_for_export(self):
        scenes = self.controller.scenes or [self.controller.current_scene]
        return scenes

    def _export_pdf(self):
        path = filedialog.asksaveasfilename(defaultextension=".pdf",
                                            filetypes=[("PDF", "*.pdf")])
        if not path:
            return
        try:
            PDFExporter(self.settings).export(self._scenes_for_export(), path)
        except TreeVizError as e:
            messagebox.showerror("PDF Error", str(e))
            return
        self.status_var.set(f"PDF exported: {path}")

    def _export_video(self):
        path = filedialog.asksaveasfilename(defaultextension=".gif",
                                            filetypes=[("GIF", "*.gif"), ("MP4 Video", "*.mp4")])
        if not path:
            return
        try:
            n = VideoExporter(self.settings).export(self._scenes_for_export(), path, fps=2)
        except TreeVizError as e:
            messagebox.showerror("Video Error", str(e))
            return
        self.status_var.set(f"Exported {n} frames: {path}")

    # ═════════════════════════════════════════════════════════════
    #  THEME
    # ═════════════════════════════════════════════════════════════

    def _toggle_theme(self):
        self.settings.toggle_theme()
        self._apply_theme()

    def _reset_colors(self):
        self.settings.reset_colors()
        self._apply_theme()

    def _apply_theme(self):
        """Rebuild every widget with the current colours, keeping playback state."""
        for w in self.winfo_children():
            w.destroy()
        self.configure(bg=self.settings.get("BG"))
        self._build_ui()
        self.timeline.config(to=self.controller.total_steps)
        self._redraw()

    def _on_close(self):
        self._cancel()
        try:
            self.settings.save()
        except OSError as e:
            logger.warning("could not save settings: %s", e)
        self.destroy()


def main():
    level = os.environ.get("TREEVIZ_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    PlayerWindow().mainloop()


if __name__ == "__main__":
    main()
