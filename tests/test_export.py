import pytest

from conftest import SCENARIO_VALUES, run
from treeviz.bst import BinarySearchTree
from treeviz.errors import ExportError, TreeVizError
from treeviz.export import PDFExporter, SceneImageRenderer, VideoExporter, describe
from treeviz.producer import SceneProducer
from treeviz.scene import Scene


@pytest.fixture
def scenes():
    producer = SceneProducer()
    tree = BinarySearchTree(producer)
    tree.load(SCENARIO_VALUES)
    return run(tree, producer, "delete", 50)


def test_describe():
    assert describe(Scene(action={"type": "VISIT", "nodeId": "node-0", "value": 4})) == "VISIT 4"
    assert describe(Scene(action={"type": "HIGHLIGHT_NODE", "nodeId": "n",
                                  "reason": "found"})) == "HIGHLIGHT_NODE (found)"
    assert describe(Scene(action={"type": "end"})) == "end"


def test_describe_toast(scenes):
    toast_scene = next(s for s in scenes if s.toast is not None)
    assert describe(toast_scene) == "TOAST: Deleted: Node with value 50 deleted."


def test_render_every_scene(settings, scenes):
    renderer = SceneImageRenderer(settings, 320, 200)
    for i, scene in enumerate(scenes):
        img = renderer.render(scene, f"Step {i + 1}")
        assert img.size == (320, 200)
        assert img.mode == "RGB"


def test_render_empty_scene(settings):
    img = SceneImageRenderer(settings).render(Scene())
    assert img.size == (800, 500)


def test_pdf_export(settings, scenes, tmp_path):
    out = tmp_path / "walkthrough.pdf"
    pages = PDFExporter(settings).export(scenes, str(out))
    assert pages == len(scenes) + 2
    assert out.read_bytes().startswith(b"%PDF")


def test_pdf_export_to_missing_directory(settings, scenes, tmp_path):
    with pytest.raises(ExportError):
        PDFExporter(settings).export(scenes, str(tmp_path / "nope" / "x.pdf"))


def test_video_frames_hold(settings, scenes):
    exporter = VideoExporter(settings, 160, 120)
    frames = exporter.frames(scenes[:3], hold=2)
    assert len(frames) == 6
    assert frames[0].shape == (120, 160, 3)


def test_gif_export(settings, scenes, tmp_path):
    out = tmp_path / "walkthrough.gif"
    n = VideoExporter(settings, 160, 120).export(scenes, str(out), fps=4)
    assert n == len(scenes)
    assert out.read_bytes()[:3] == b"GIF"


def test_export_nothing_raises(settings, tmp_path):
    with pytest.raises(TreeVizError):
        VideoExporter(settings).export([], str(tmp_path / "x.gif"))
