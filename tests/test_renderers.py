"""
Test cases for the OpenCV puppet renderer and its drawing helpers.
"""
import unittest
import sys
from pathlib import Path

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from puppet_gestures.renderer_cv import OpenCVPuppetRenderer, apply_effect, overlay_image, placeholder_sprite
from puppet_gestures.types import PuppetAsset, RendererProto


class TestDrawingHelpers(unittest.TestCase):
    """Test alpha blending and effects."""

    def test_overlay_opaque_sprite(self):
        frame = np.zeros((10, 10, 3), dtype=np.uint8)
        sprite = np.full((4, 4, 4), 255, dtype=np.uint8)

        overlay_image(frame, sprite, 2, 3)

        self.assertTrue((frame[3:7, 2:6] == 255).all())
        self.assertEqual(int(frame.sum()), 4 * 4 * 3 * 255)

    def test_overlay_transparent_sprite(self):
        frame = np.full((10, 10, 3), 7, dtype=np.uint8)
        sprite = np.zeros((4, 4, 4), dtype=np.uint8)
        sprite[:, :, :3] = 255

        overlay_image(frame, sprite, 0, 0)

        self.assertTrue((frame == 7).all())

    def test_overlay_clips_at_frame_edges(self):
        frame = np.zeros((10, 10, 3), dtype=np.uint8)
        sprite = np.full((4, 4, 4), 255, dtype=np.uint8)

        overlay_image(frame, sprite, 8, -2)
        self.assertTrue((frame[0:2, 8:10] == 255).all())
        self.assertEqual(int(frame.sum()), 2 * 2 * 3 * 255)

        # fully off-frame is a no-op
        overlay_image(frame, sprite, 20, 20)
        self.assertEqual(int(frame.sum()), 2 * 2 * 3 * 255)

    def test_effects_keep_sprite_height(self):
        sprite = placeholder_sprite("wolf", size=64)
        for effect in ("bob", "flutter", "hop", "sway"):
            moved, dx, dy = apply_effect(sprite, effect, 0.3)
            self.assertEqual(moved.shape[0], 64, effect)
            self.assertEqual(moved.shape[2], 4, effect)

    def test_hop_moves_up(self):
        sprite = placeholder_sprite("rabbit", size=100)
        _, dx, dy = apply_effect(sprite, "hop", 0.3)
        self.assertEqual(dx, 0)
        self.assertLess(dy, 0)


class TestOpenCVPuppetRenderer(unittest.IsolatedAsyncioTestCase):
    """Test the renderer state driven by commands."""

    def setUp(self):
        self.renderer = OpenCVPuppetRenderer(base_dir=Path(__file__).parent, scale=0.5)
        self.frame = np.zeros((120, 160, 3), dtype=np.uint8)

    def tearDown(self):
        self.renderer.close()

    async def test_hidden_renderer_leaves_frame_untouched(self):
        self.assertIsInstance(self.renderer, RendererProto)
        out = self.renderer.compose(self.frame.copy(), 0.0)
        self.assertEqual(int(out.sum()), 0)

    async def test_static_puppet_uses_placeholder_when_image_missing(self):
        await self.renderer.show_static("wolf", "missing/wolf.png")
        self.assertEqual(self.renderer.mode, "static")

        out = self.renderer.compose(self.frame.copy(), 0.0)
        self.assertGreater(int(out.sum()), 0)

    async def test_effect_animation(self):
        asset = PuppetAsset(image="missing/butterfly.png", effect="flutter")
        await self.renderer.play_animation("butterfly", asset)
        self.assertEqual(self.renderer.mode, "effect")

        self.renderer.compose(self.frame.copy(), 5.0)
        self.assertEqual(self.renderer.animation_started_at, 5.0)

    async def test_unreadable_video_falls_back_to_still(self):
        asset = PuppetAsset(image="missing/rabbit.png", video="missing/rabbit.mp4")
        await self.renderer.play_animation("rabbit", asset)
        self.assertEqual(self.renderer.mode, "static")

    async def test_hide(self):
        await self.renderer.show_static("elephant", "missing/elephant.png")
        await self.renderer.hide_puppet()

        self.assertIsNone(self.renderer.mode)
        self.assertIsNone(self.renderer.label)
        out = self.renderer.compose(self.frame.copy(), 0.0)
        self.assertEqual(int(out.sum()), 0)


if __name__ == '__main__':
    unittest.main()
