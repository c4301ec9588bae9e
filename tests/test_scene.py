"""
Unit tests for glasses_core/scene.py.

Tests cover cover-fitting, the scene projection of the state, rasterizing
and the interactive canvas JSON.
"""

import pytest
import numpy as np

from app_config.constants import CanvasConfig, StickerConfig
from glasses_core.scene import (
    FABRIC_VERSION,
    BackgroundLayer,
    StickerLayer,
    TransformerLayer,
    cover_fit,
    build_scene,
    box_corners,
    rasterize,
    scene_to_fabric,
    node_from_fabric,
)
from glasses_core.transform import BoundingBox


class TestCoverFit:
    """Test suite for cover_fit."""

    @pytest.mark.parametrize("shape", [(240, 400, 3), (400, 240, 3), (320, 320, 3), (50, 80, 3)])
    def test_output_fills_box(self, shape):
        photo = np.full(shape, 128, dtype=np.uint8)
        result = cover_fit(photo, 320, 320)
        assert result.shape == (320, 320, 3)

    def test_centre_crop(self, sample_image):
        """A wide red|blue photo keeps its middle: both colours survive."""
        result = cover_fit(sample_image, 320, 320)
        left, right = result[160, 5], result[160, -5]
        assert left[0] > 200 and left[2] < 50
        assert right[2] > 200 and right[0] < 50


class TestBuildScene:
    """Test suite for build_scene."""

    def test_empty_canvas(self, fresh_state):
        scene = build_scene(fresh_state)
        assert (scene.width, scene.height) == (CanvasConfig.WIDTH, CanvasConfig.HEIGHT)
        assert scene.background is None
        assert scene.transformer is None
        assert scene.layers == [scene.sticker]

    def test_sticker_layer_mirrors_state(self, fresh_state):
        layer = build_scene(fresh_state).sticker
        sticker = fresh_state.sticker
        assert layer.node_id == StickerConfig.STICKER_ID
        assert (layer.glyph, layer.x, layer.y) == (sticker.glyph, sticker.x, sticker.y)
        assert (layer.font_size, layer.rotation) == (sticker.font_size, sticker.rotation)
        assert layer.draggable is True

    def test_background_cover_fitted(self, photo_state):
        scene = build_scene(photo_state)
        assert isinstance(scene.background, BackgroundLayer)
        assert scene.background.image.shape == (CanvasConfig.HEIGHT, CanvasConfig.WIDTH, 3)

    def test_transformer_only_when_selected(self, photo_state, selected_state):
        assert build_scene(photo_state).transformer is None
        transformer = build_scene(selected_state).transformer
        assert isinstance(transformer, TransformerLayer)
        assert transformer.target_id == StickerConfig.STICKER_ID
        assert transformer.min_box_size == CanvasConfig.MIN_BOX_SIZE
        assert transformer.visible is True

    def test_layer_order(self, selected_state):
        scene = build_scene(selected_state)
        assert scene.layers == [scene.background, scene.sticker, scene.transformer]


class TestBoxCorners:
    """Test suite for box_corners."""

    def test_upright(self):
        corners = box_corners(BoundingBox(10, 20, 30, 40))
        assert corners == [(10, 20), (40, 20), (40, 60), (10, 60)]

    def test_rotation_about_top_left(self):
        corners = box_corners(BoundingBox(10, 20, 30, 40, 90))
        assert corners[0] == pytest.approx((10, 20))
        assert corners[1] == pytest.approx((10, 50))
        assert corners[3] == pytest.approx((-30, 20))


class TestRasterize:
    """Test suite for rasterize."""

    def test_canvas_size(self, fresh_state):
        image = rasterize(build_scene(fresh_state))
        assert image.size == (CanvasConfig.WIDTH, CanvasConfig.HEIGHT)
        assert image.mode == "RGBA"

    def test_photo_drawn(self, photo_state):
        image = rasterize(build_scene(photo_state))
        assert image.getpixel((5, 300))[:3] == pytest.approx((255, 0, 0), abs=10)

    def test_handles_drawn_when_visible(self, selected_state):
        scene = build_scene(selected_state)
        shown = np.asarray(rasterize(scene))
        scene.transformer.visible = False
        hidden = np.asarray(rasterize(scene))
        assert not np.array_equal(shown, hidden)

    def test_hidden_overlay_matches_unselected(self, photo_state, selected_state):
        scene = build_scene(selected_state)
        scene.transformer.visible = False
        np.testing.assert_array_equal(
            np.asarray(rasterize(scene)),
            np.asarray(rasterize(build_scene(photo_state))),
        )

    def test_sticker_moves_with_state(self, photo_state):
        from glasses_core.state import update_sticker

        state = update_sticker(photo_state, glyph="ABC")
        a = np.asarray(rasterize(build_scene(state)))
        b = np.asarray(rasterize(build_scene(update_sticker(state, x=20.0, y=20.0))))
        assert not np.array_equal(a, b)


class TestFabricProjection:
    """Test suite for scene_to_fabric and node_from_fabric."""

    def test_sticker_object(self, fresh_state):
        data = scene_to_fabric(build_scene(fresh_state))
        assert data["version"] == FABRIC_VERSION
        (obj,) = data["objects"]
        assert obj["type"] == "text"
        assert obj["text"] == "😎"
        assert (obj["left"], obj["top"], obj["angle"]) == (160.0, 120.0, 0.0)
        assert (obj["scaleX"], obj["scaleY"]) == (1, 1)
        assert obj["fontSize"] == 50.0
        assert obj["selectable"] is True

    def test_handles_follow_selection(self, photo_state, selected_state):
        unselected = scene_to_fabric(build_scene(photo_state))["objects"][0]
        selected = scene_to_fabric(build_scene(selected_state))["objects"][0]
        assert unselected["hasControls"] is False
        assert selected["hasControls"] is True
        assert selected["hasBorders"] is True
        assert selected["minScaleLimit"] > 0

    def test_read_back(self, fresh_state):
        node = node_from_fabric(scene_to_fabric(build_scene(fresh_state)))
        assert (node.x, node.y, node.rotation) == (160.0, 120.0, 0.0)
        assert (node.scale_x, node.scale_y) == (1.0, 1.0)

    def test_reported_transform(self):
        data = {"objects": [{"type": "text", "left": 12.5, "top": 7, "angle": 30, "scaleX": 1.4, "scaleY": 1.4}]}
        node = node_from_fabric(data)
        assert (node.x, node.y, node.rotation) == (12.5, 7.0, 30.0)
        assert node.scale_x == pytest.approx(1.4)

    @pytest.mark.parametrize("data", [None, {}, {"objects": []}, {"objects": [{"type": "rect"}]}])
    def test_missing_sticker(self, data):
        assert node_from_fabric(data) is None

    def test_custom_sticker_layer(self):
        """Projection reads only the layers, not the state."""
        from glasses_core.scene import SceneGraph

        scene = SceneGraph(100, 100, StickerLayer("glasses", "👓", 1.0, 2.0, 30.0, 90.0, draggable=False))
        obj = scene_to_fabric(scene)["objects"][0]
        assert (obj["text"], obj["angle"], obj["selectable"]) == ("👓", 90.0, False)
