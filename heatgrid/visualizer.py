"""
Visualization for the heat diffusion simulation.

Maps committed temperatures to a cold (blue) -> hot (red) colour, one square
tile per cell, with an optional numeric overlay. The camera can be zoomed
with the mouse wheel and panned by dragging.
"""

import pygame
import numpy as np
from typing import Optional, Tuple

try:
    from .simulation import HeatSimulation
except ImportError:
    from simulation import HeatSimulation


def color_ratio(temperature, min_heat: float, max_heat: float):
    """Position of ``temperature`` in [min_heat, max_heat], clipped to [0, 1]."""
    return np.clip((np.asarray(temperature, dtype=np.float64) - min_heat) / (max_heat - min_heat),
                   0.0, 1.0)


def temperature_to_rgb(temperature: np.ndarray, min_heat: float, max_heat: float) -> np.ndarray:
    """RGB image (height, width, 3) with red = ratio and blue = 1 - ratio."""
    ratio = color_ratio(temperature, min_heat, max_heat)
    rgb = np.zeros(ratio.shape + (3,), dtype=np.uint8)
    rgb[..., 0] = np.round(ratio * 255).astype(np.uint8)
    rgb[..., 2] = np.round((1.0 - ratio) * 255).astype(np.uint8)
    return rgb


def tile_origin(x: int, y: int, cell_size: float,
                offset: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    """World position of the top-left corner of tile (x, y)."""
    return (offset[0] + x * cell_size, offset[1] + y * cell_size)


class HeatVisualizer:
    """Interactive pygame viewer for HeatSimulation."""

    min_zoom = 0.25
    max_zoom = 8.0

    def __init__(
        self,
        simulation: HeatSimulation,
        window_width: int = 800,
        window_height: int = 800,
    ):
        """
        Initialize visualizer.

        Args:
            simulation: HeatSimulation instance
            window_width: Window width in pixels
            window_height: Window height in pixels
        """
        self.simulation = simulation
        self.config = simulation.config

        pygame.init()
        self.screen = pygame.display.set_mode((window_width, window_height))
        pygame.display.set_caption("Incremental Heat Diffusion")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)
        self.small_font = pygame.font.Font(None, 14)

        self.window_width = window_width
        self.window_height = window_height

        # Display settings
        self.show_info = True
        self.show_help = False
        self.show_values = False
        self.show_shadow = False

        # Camera: world offset of the grid and zoom factor
        self.zoom = 1.0
        grid_w = self.config.width * self.config.cell_size
        grid_h = self.config.height * self.config.cell_size
        self.offset = [(window_width - grid_w) / 2.0, (window_height - grid_h) / 2.0]
        self.panning = False
        self.last_mouse: Optional[Tuple[int, int]] = None

        self.grid_surface = pygame.Surface((self.config.width, self.config.height))
        self.running = True

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------
    def run(self):
        """Main visualization loop."""
        while self.running:
            frame_seconds = self.clock.tick(60) / 1000.0
            self.handle_events()
            self.simulation.advance(frame_seconds)
            self.render()
            pygame.display.flip()

        pygame.quit()

    def handle_events(self):
        """Handle user input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button in (1, 2, 3):
                    self.panning = True
                    self.last_mouse = event.pos

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button in (1, 2, 3):
                    self.panning = False
                    self.last_mouse = None

            elif event.type == pygame.MOUSEMOTION:
                if self.panning and self.last_mouse is not None:
                    self.pan(event.pos[0] - self.last_mouse[0], event.pos[1] - self.last_mouse[1])
                    self.last_mouse = event.pos

            elif event.type == pygame.MOUSEWHEEL:
                self.zoom_by(1.1 ** event.y, pygame.mouse.get_pos())

    def handle_keydown(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_SPACE:
            self.simulation.paused = not self.simulation.paused

        elif event.key == pygame.K_RIGHT:
            # Single tick while paused
            if self.simulation.paused:
                self.simulation.step()

        elif event.key == pygame.K_r:
            self.simulation.reset()
            self.simulation.paused = True

        elif event.key == pygame.K_n:
            self.show_values = not self.show_values

        elif event.key == pygame.K_g:
            if self.simulation.shadow is not None:
                self.show_shadow = not self.show_shadow

        elif event.key == pygame.K_i:
            self.show_info = not self.show_info

        elif event.key == pygame.K_h:
            self.show_help = not self.show_help

        elif event.key == pygame.K_l:
            self.simulation.logging_enabled = not self.simulation.logging_enabled

        elif event.key == pygame.K_ESCAPE:
            self.running = False

    # ------------------------------------------------------------------
    # Camera
    # ------------------------------------------------------------------
    def pan(self, dx: float, dy: float):
        self.offset[0] += dx
        self.offset[1] += dy

    def zoom_by(self, factor: float, anchor: Tuple[int, int]):
        """Zoom around a screen point so the point under the cursor stays put."""
        new_zoom = float(np.clip(self.zoom * factor, self.min_zoom, self.max_zoom))
        applied = new_zoom / self.zoom
        self.offset[0] = anchor[0] - (anchor[0] - self.offset[0]) * applied
        self.offset[1] = anchor[1] - (anchor[1] - self.offset[1]) * applied
        self.zoom = new_zoom

    @property
    def tile_size(self) -> float:
        return self.config.cell_size * self.zoom

    def screen_to_cell(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        """Grid cell under a screen position, or None off the grid."""
        x = int((pos[0] - self.offset[0]) // self.tile_size)
        y = int((pos[1] - self.offset[1]) // self.tile_size)
        if 0 <= x < self.config.width and 0 <= y < self.config.height:
            return (x, y)
        return None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def displayed_field(self) -> np.ndarray:
        if self.show_shadow and self.simulation.shadow is not None:
            return self.simulation.shadow.temperature
        return self.simulation.primary.temperature

    def render(self):
        """Draw the grid and overlays to the screen surface."""
        self.screen.fill((20, 20, 20))
        T = self.displayed_field()

        rgb = temperature_to_rgb(T, self.config.min_heat, self.config.max_heat)
        pygame.surfarray.blit_array(self.grid_surface, rgb.swapaxes(0, 1))
        size = (max(1, int(self.config.width * self.tile_size)),
                max(1, int(self.config.height * self.tile_size)))
        scaled = pygame.transform.scale(self.grid_surface, size)
        self.screen.blit(scaled, (int(self.offset[0]), int(self.offset[1])))

        if self.show_values and self.tile_size >= 16:
            self.render_values(T)
        if self.show_info:
            self.render_info()
        if self.show_help:
            self.render_help()

    def render_values(self, T: np.ndarray):
        """Numeric overlay, one label per tile."""
        for y in range(self.config.height):
            for x in range(self.config.width):
                sx, sy = tile_origin(x, y, self.tile_size, self.offset)
                text = self.small_font.render(f"{T[y, x]:.0f}", True, (255, 255, 255))
                rect = text.get_rect(center=(sx + self.tile_size / 2, sy + self.tile_size / 2))
                self.screen.blit(text, rect)

    def render_info(self):
        """Render information overlay."""
        info = self.simulation.get_info()

        y = 10
        lines = [
            f"FPS: {info['fps']:.1f}",
            f"Time: {info['time']:.2f} s",
            f"Tick: {info['step_count']}",
            f"Sweep: {info['sweep_count']} ({info['chunks_per_sweep']} ticks each)",
            f"Chunk: {info['cursor']}",
            f"Paused: {self.simulation.paused}",
            f"Grid: {'shadow' if self.show_shadow else 'primary'}",
            "",
            f"Avg T: {info['avg_temperature']:.2f}",
            f"Min/Max T: {info['min_temperature']:.1f} / {info['max_temperature']:.1f}",
        ]
        if self.simulation.shadow is not None:
            lines.append(f"Shadow drift: {info['shadow_drift']:.3g}")

        for line in lines:
            text = self.small_font.render(line, True, (255, 255, 255))
            self.screen.blit(text, (10, y))
            y += 20

    def render_help(self):
        """Render help overlay."""
        help_text = [
            "Controls:",
            "SPACE - Pause/Resume",
            "RIGHT - Single tick (when paused)",
            "R - Reset simulation (paused)",
            "N - Toggle temperature values",
            "G - Toggle primary/shadow grid",
            "Scroll - Zoom",
            "Drag - Pan",
            "I - Toggle info display",
            "L - Toggle performance logging",
            "H - Toggle this help",
            "ESC - Exit",
        ]

        overlay = pygame.Surface((260, len(help_text) * 25 + 20))
        overlay.set_alpha(200)
        overlay.fill((0, 0, 0))
        self.screen.blit(overlay, (self.screen.get_width() - 270, 10))

        y = 20
        for line in help_text:
            text = self.small_font.render(line, True, (255, 255, 255))
            self.screen.blit(text, (self.screen.get_width() - 260, y))
            y += 25
