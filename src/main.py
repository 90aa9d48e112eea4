# main.py
import argparse
import logging
import time
from pathlib import Path
from typing import Optional, Sequence
import numpy as np
import pygame
from PIL import Image
from core import config
from core.logging_config import setup_logging
from animation.inputs import InputState
from renderer.raytracer import BACKENDS, Renderer, uv_gradient
from renderer.tone_mapping import to_rgb8
from scenes.presets import PRESETS, SceneSetup, load_preset

logger = logging.getLogger(__name__)

class Application:
    def __init__(self, setup: SceneSetup, window_size=config.RESOLUTION,
                 backend: str = config.BACKEND, target_fps: int = config.FPS):
        pygame.init()

        self.setup = setup
        self.window_width, self.window_height = window_size
        self.backend = backend
        self.target_fps = target_fps

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption(f"Sphere Ray Caster - {setup.name}")

        # Render at a fraction of the window size and upscale on blit
        self.quality_levels = {
            "interactive": {"scale": 0.5},
            "balanced": {"scale": 0.75},
            "full": {"scale": 1.0},
        }
        self.current_quality = "interactive" if backend == "python" else "full"
        self.apply_quality_settings()

        self.inputs = InputState(aspect_ratio=self.window_width / self.window_height)

        # Direction names understood by KeyboardMover
        self.key_map = {
            "left": (pygame.K_LEFT, pygame.K_a),
            "right": (pygame.K_RIGHT, pygame.K_d),
            "forward": (pygame.K_UP, pygame.K_w),
            "backward": (pygame.K_DOWN, pygame.K_s),
        }
        self.quality_keys = {
            pygame.K_1: "interactive",
            pygame.K_2: "balanced",
            pygame.K_3: "full",
        }

        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.frame_count = 0

    def apply_quality_settings(self):
        scale = self.quality_levels[self.current_quality]["scale"]
        self.render_width = max(8, int(self.window_width * scale))
        self.render_height = max(8, int(self.window_height * scale))
        self.renderer = Renderer(self.render_width, self.render_height, backend=self.backend)
        logger.info("Quality %s: rendering at %dx%d", self.current_quality,
                    self.render_width, self.render_height)

    def to_ndc(self, pos):
        x = (pos[0] / self.window_width) * 2 - 1
        y = 1 - (pos[1] / self.window_height) * 2
        return x, y

    def handle_events(self) -> bool:
        """Feeds window events into the input inbox. Returns False on quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return False
                elif event.key in self.quality_keys:
                    quality = self.quality_keys[event.key]
                    if quality != self.current_quality:
                        self.current_quality = quality
                        self.apply_quality_settings()
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.inputs.begin_drag()
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.inputs.end_drag()
            elif event.type == pygame.MOUSEMOTION:
                self.inputs.post_drag(*self.to_ndc(event.pos))

        pressed = pygame.key.get_pressed()
        self.inputs.set_keys(
            name for name, keys in self.key_map.items()
            if any(pressed[key] for key in keys)
        )
        return True

    def run(self):
        setup = self.setup
        logger.info("Running scene %s with %s backend", setup.name, self.backend)
        try:
            running = True
            while running:
                dt = self.clock.tick(self.target_fps) / 1000.0
                running = self.handle_events()
                if not running:
                    break

                setup.controller.update(dt, self.inputs)

                render_start = time.perf_counter()
                frame = self.renderer.render(setup.scene, setup.camera, setup.light, setup.shading)
                render_time = time.perf_counter() - render_start

                frame_surface = pygame.surfarray.make_surface(to_rgb8(frame))
                if self.render_width != self.window_width or self.render_height != self.window_height:
                    frame_surface = pygame.transform.scale(frame_surface, (self.window_width, self.window_height))
                self.screen.blit(frame_surface, (0, 0))

                fps_text = self.font.render(
                    f"FPS: {self.clock.get_fps():.1f} | Render: {render_time * 1000:.0f} ms | Quality: {self.current_quality}",
                    True, (255, 255, 255))
                self.screen.blit(fps_text, (10, 10))

                pygame.display.flip()
                self.frame_count += 1
        finally:
            logger.info("Shutting down after %d frames", self.frame_count)
            pygame.quit()

def render_to_file(setup: SceneSetup, width: int, height: int, output: Path,
                   backend: str = "python", frames: int = 0, fps: int = 60) -> np.ndarray:
    """
    Advances the scene `frames` times at a fixed time step, renders one
    frame and writes it as an image. Returns the 8-bit frame.
    """
    inputs = InputState(aspect_ratio=width / height)
    for _ in range(frames):
        setup.controller.update(1.0 / fps, inputs)

    renderer = Renderer(width, height, backend=backend)
    pixels = to_rgb8(renderer.render(setup.scene, setup.camera, setup.light, setup.shading))
    save_image(pixels, output)
    return pixels

def save_image(pixels: np.ndarray, output: Path):
    # Frames are indexed [x, y]; images want rows first
    Image.fromarray(np.ascontiguousarray(pixels.transpose(1, 0, 2)), "RGB").save(output)
    logger.info("Wrote %s", output)

def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sphere ray caster")
    parser.add_argument("--scene", default=config.SCENE, choices=sorted(PRESETS),
                        help=f"Scene preset (default: {config.SCENE})")
    parser.add_argument("--width", type=int, default=config.RESOLUTION[0], help="Width in pixels")
    parser.add_argument("--height", type=int, default=config.RESOLUTION[1], help="Height in pixels")
    parser.add_argument("--backend", default=config.BACKEND, choices=BACKENDS,
                        help=f"Render backend (default: {config.BACKEND})")
    parser.add_argument("--fps", type=int, default=config.FPS, help="Target frames per second")
    parser.add_argument("--output", type=Path, default=None,
                        help="Render a single frame to this image file instead of opening a window")
    parser.add_argument("--frames", type=int, default=0,
                        help="Animation frames to advance before a headless render")
    parser.add_argument("--uv", action="store_true",
                        help="Write the UV debug gradient to --output instead of a scene")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Logging level")
    return parser.parse_args(argv)

def main(argv: Optional[Sequence[str]] = None):
    args = parse_arguments(argv)
    setup_logging(level=args.log_level)

    if args.uv:
        if args.output is None:
            raise SystemExit("--uv needs --output")
        save_image(to_rgb8(uv_gradient(args.width, args.height)), args.output)
        return

    setup = load_preset(args.scene)
    if args.output is not None:
        render_to_file(setup, args.width, args.height, args.output,
                       backend=args.backend, frames=args.frames, fps=args.fps)
        return

    app = Application(setup, window_size=(args.width, args.height),
                      backend=args.backend, target_fps=args.fps)
    try:
        app.run()
    except Exception:
        logger.exception("Error during execution")
        raise

if __name__ == "__main__":
    main()
