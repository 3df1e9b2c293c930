"""
╔══════════════════════════════════════════════════════════════════╗
║               treeviz — Off-screen rendering & export            ║
║                                                                  ║
║  SceneImageRenderer   one Scene  → Pillow Image                  ║
║  PDFExporter          [Scene]    → multi-page PDF walkthrough    ║
║  VideoExporter        [Scene]    → animated GIF / MP4            ║
║                                                                  ║
║  Rendering reads scenes only; it never touches a structure, so   ║
║  exporting a storyboard is as side-effect-free as scrubbing it.  ║
║                                                                  ║
║  Requires: Pillow, numpy, imageio (+ imageio-ffmpeg for MP4),    ║
║            reportlab                                             ║
╚══════════════════════════════════════════════════════════════════╝
"""

import logging
import os
import tempfile
from collections import Counter
from datetime import datetime

import imageio
import numpy as np
from PIL import Image, ImageDraw, ImageFont
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfgen import canvas as pdf_canvas

from treeviz.errors import ExportError

logger = logging.getLogger(__name__)


def describe(scene) -> str:
    """One-line caption for a scene, e.g. ``VISIT 42`` or ``TOAST: Found``."""
    action = dict(scene.action)
    kind = action.pop("type", "")
    if scene.toast is not None:
        return f"{kind}: {scene.toast.title}: {scene.toast.description}"
    if "value" in action:
        return f"{kind} {action['value']}"
    if "reason" in action:
        return f"{kind} ({action['reason']})"
    return kind


# ═════════════════════════════════════════════════════════════════
#  SCENE IMAGE RENDERER
#
#  Layout: title at top, tree in the middle, toast banner at the
#  bottom (if the scene carries one).  Scene coordinates are fitted
#  into the drawable area, so any LayoutConfig works.
# ═════════════════════════════════════════════════════════════════
class SceneImageRenderer:
    """
    Off-screen scene renderer using Pillow.

    Args:
        settings (Settings): For colour lookups.
        width    (int)     : Image width in pixels.
        height   (int)     : Image height in pixels.
    """

    def __init__(self, settings, width=800, height=500):
        self.settings    = settings
        self.width       = width
        self.height      = height
        self.node_radius = 20
        self.padding     = 40

    @staticmethod
    def _load_fonts():
        """
        Attempt to load a monospace font; Pillow's bitmap font otherwise.

        Returns:
            tuple[ImageFont, ImageFont]: (normal, small)
        """
        candidates = [
            "DejaVuSansMono.ttf",
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",   # Debian/Ubuntu
            "/usr/share/fonts/TTF/DejaVuSansMono.ttf",               # Arch
            "/System/Library/Fonts/Menlo.ttc",                       # macOS
            "consola.ttf",                                           # Windows
        ]
        for p in candidates:
            try:
                return ImageFont.truetype(p, 14), ImageFont.truetype(p, 11)
            except OSError:
                continue
        default = ImageFont.load_default()
        return default, default

    def _fit(self, nodes, top, bottom):
        """Return a function mapping scene (x, y) into the drawable box."""
        pad = self.padding
        xs = [n.x for n in nodes]
        ys = [n.y for n in nodes]
        span_x = (max(xs) - min(xs)) or 1.0
        span_y = (max(ys) - min(ys)) or 1.0
        box_w = self.width - 2 * pad
        box_h = max(bottom - top, 1)
        single_x = len(set(xs)) == 1
        single_y = len(set(ys)) == 1

        def to_px(x, y):
            px = self.width / 2 if single_x else pad + (x - min(xs)) / span_x * box_w
            py = top if single_y else top + (y - min(ys)) / span_y * box_h
            return int(px), int(py)
        return to_px

    def render(self, scene, title=""):
        """
        Render one scene.

        Args:
            scene (Scene): What to draw.
            title (str)  : Text drawn at the top of the image.

        Returns:
            Image: RGB image of ``width`` × ``height``.
        """
        s = self.settings
        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font, font_s = self._load_fonts()

        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font)

        bottom = self.height - self.padding
        if scene.toast is not None:
            y0 = self.height - 50
            bottom = y0 - self.node_radius - 10
            colour = s.get("TOAST_ERR") if scene.toast.destructive else s.get("ACCENT")
            draw.rectangle([5, y0, self.width - 5, self.height - 5],
                           fill=s.get("TOAST_BG"), outline=colour, width=2)
            draw.text((12, y0 + 6), scene.toast.title, fill=colour, font=font)
            draw.text((12, y0 + 24), scene.toast.description[:100],
                      fill=s.get("FG"), font=font_s)

        nodes = scene.visible_nodes()
        if not nodes:
            draw.text((self.width // 2 - 40, self.height // 2),
                      "Empty", fill=s.get("FG"), font=font)
            return img

        to_px = self._fit(scene.nodes, self.padding + 10, bottom)
        pos = {n.id: to_px(n.x, n.y) for n in scene.nodes}

        # edges first so nodes sit on top
        for e in scene.visible_edges():
            if e.source in pos and e.target in pos:
                draw.line([pos[e.source], pos[e.target]], fill=s.get("EDGE"), width=2)

        r = self.node_radius
        for n in nodes:
            x, y = pos[n.id]
            style = scene.node_style(n.id)
            fill, outline, ow = s.get("NODE_FILL"), "white", 1
            if style.highlight == "deletion":
                fill = s.get("DELETION")
            elif style.highlight == "default":
                outline, ow = s.get("HIGHLIGHT"), 3
            if n.id == scene.visitor_node_id:
                draw.ellipse([x - r - 5, y - r - 5, x + r + 5, y + r + 5],
                             outline=s.get("VISITOR"), width=3)
            draw.ellipse([x - r, y - r, x + r, y + r], fill=fill, outline=outline, width=ow)

            txt = str(n.value)
            bb = draw.textbbox((0, 0), txt, font=font)
            tw, th = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((x - tw // 2, y - th // 2), txt, fill=s.get("NODE_TEXT"), font=font)
            if n.tag is not None:
                draw.text((x - 4, y + r + 2), str(n.tag), fill=s.get("FG"), font=font_s)
        return img


# ═════════════════════════════════════════════════════════════════
#  PDF EXPORTER
#
#  Title page, one page per scene, summary page with action counts.
# ═════════════════════════════════════════════════════════════════
class PDFExporter:

    def __init__(self, settings):
        self.settings = settings
        self.renderer = SceneImageRenderer(settings, 700, 400)

    def export(self, scenes, filename, title="treeviz walkthrough"):
        """
        Write ``scenes`` as a landscape-A4 PDF.

        Returns:
            int: Number of pages written.

        Raises:
            ExportError: the PDF could not be produced.
        """
        scenes = list(scenes)
        try:
            pw, ph = landscape(A4)
            c = pdf_canvas.Canvas(filename, pagesize=landscape(A4))

            c.setFont("Helvetica-Bold", 28)
            c.drawCentredString(pw / 2, ph - 100, title)
            c.setFont("Helvetica", 12)
            c.drawCentredString(pw / 2, ph - 140,
                f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
            c.drawCentredString(pw / 2, ph - 160, f"Total Steps: {len(scenes)}")
            c.showPage()

            with tempfile.TemporaryDirectory() as tmp:
                for i, scene in enumerate(scenes):
                    img = self.renderer.render(scene, f"Step {i + 1}")
                    ip = os.path.join(tmp, f"s{i:04d}.png")
                    img.save(ip)

                    c.setFont("Helvetica-Bold", 14)
                    c.drawString(30, ph - 30, f"Step {i + 1} of {len(scenes)}")
                    c.drawImage(ip, 30, ph - 450, width=700, height=400,
                                preserveAspectRatio=True)
                    c.setFont("Helvetica", 12)
                    c.drawString(30, ph - 480, f"Action: {describe(scene)}")
                    c.showPage()

            counts = Counter(scene.action_type for scene in scenes)
            c.setFont("Helvetica-Bold", 20)
            c.drawCentredString(pw / 2, ph - 100, "Summary")
            c.setFont("Helvetica", 12)
            y = ph - 150
            for line in [f"Total Steps: {len(scenes)}"] + \
                        [f"{kind}: {n}" for kind, n in sorted(counts.items())]:
                c.drawString(100, y, line)
                y -= 22
            c.showPage()
            c.save()
        except (OSError, ValueError) as e:
            raise ExportError(f"PDF export to {filename} failed: {e}") from e
        logger.info("exported %d scenes to %s", len(scenes), filename)
        return len(scenes) + 2


# ═════════════════════════════════════════════════════════════════
#  VIDEO EXPORTER
#
#  Each scene is rendered to a Pillow image, converted to a NumPy
#  array and held for ``hold`` frames.  ``.gif`` goes through
#  imageio's Pillow plugin, anything else (``.mp4``) through ffmpeg.
# ═════════════════════════════════════════════════════════════════
class VideoExporter:

    def __init__(self, settings, width=1280, height=720):
        self.settings = settings
        self.renderer = SceneImageRenderer(settings, width, height)

    def frames(self, scenes, hold=1):
        """Rendered frames as uint8 arrays, each scene repeated ``hold`` times."""
        out = []
        for i, scene in enumerate(scenes):
            arr = np.asarray(self.renderer.render(scene, f"Step {i + 1}: {describe(scene)[:60]}"))
            out.extend([arr] * max(1, hold))
        return out

    def export(self, scenes, filename, fps=2, hold=1):
        """
        Write ``scenes`` as an animation.

        Returns:
            int: Number of frames written.

        Raises:
            ExportError: nothing to write, or the encoder failed.
        """
        frames = self.frames(scenes, hold)
        if not frames:
            raise ExportError("no scenes to export")
        try:
            if filename.lower().endswith(".gif"):
                imageio.mimwrite(filename, frames, duration=1000 / max(1, fps), loop=0)
            else:
                imageio.mimwrite(filename, frames, fps=fps)
        except (OSError, ValueError, RuntimeError) as e:
            raise ExportError(f"video export to {filename} failed: {e}") from e
        logger.info("exported %d frames to %s", len(frames), filename)
        return len(frames)
