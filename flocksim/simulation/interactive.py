"""
Interactive simulation with pygame GUI.
"""

import logging
import math
import sys
from typing import Optional, Sequence, Tuple

import pygame

from .flock import FlockSimulation
from ..core.agents.base import Agent, Color
from ..core.config import SimulationConfig, PARAMETER_RANGES, round_half_up

logger = logging.getLogger(__name__)

PREY_SIZE = 8
PREDATOR_SIZE = 12
WING_ANGLE = 2.4

PANEL_SIZE = (300, 210)
PANEL_COLOR = (0.95, 0.95, 0.95, 0.8)
TEXT_COLOR = (40, 40, 40)
SELECTED_COLOR = (200, 40, 40)

# Parameters cycled through with TAB, in panel order
ADJUSTABLE = list(PARAMETER_RANGES)
ADJUST_STEPS = 20


def to_rgba(color: Color) -> Tuple[int, int, int, int]:
    """Convert an RGBA colour in 0..1 to pygame's 0..255, clamping each channel."""
    return tuple(int(round(255 * max(0.0, min(1.0, c)))) for c in color)


def triangle_points(agent: Agent, size: float) -> Sequence[Tuple[float, float]]:
    """Vertices of a triangle pointing along the agent's velocity."""
    rot = agent.heading
    return [
        (agent.position.x + size * math.cos(angle), agent.position.y + size * math.sin(angle))
        for angle in (rot, rot - WING_ANGLE, rot + WING_ANGLE)
    ]


class PygameViewport:
    """Viewport backed by the current display surface."""

    def __init__(self, surface: pygame.Surface):
        self.surface = surface

    def width(self) -> float:
        return float(self.surface.get_width())

    def height(self) -> float:
        return float(self.surface.get_height())

    def __repr__(self) -> str:
        return f"PygameViewport({self.surface.get_width()}, {self.surface.get_height()})"


class PygameClock:
    """Frame clock reporting seconds elapsed since the previous tick."""

    def __init__(self, fps: int):
        self.fps = fps
        self._clock = pygame.time.Clock()
        self._elapsed_ms = 0

    def tick(self) -> None:
        self._elapsed_ms = self._clock.tick(self.fps)

    def elapsed_since_last_step(self) -> float:
        return self._elapsed_ms / 1000.0

    def get_fps(self) -> float:
        return self._clock.get_fps()


def adjust_parameter(config: SimulationConfig, name: str, direction: int) -> float:
    """
    Nudge a parameter by one step within its panel range.

    Args:
        config: Configuration to modify
        name: Field name from PARAMETER_RANGES
        direction: +1 or -1

    Returns:
        The new value
    """
    low, high = PARAMETER_RANGES[name]
    value = getattr(config, name) + direction * (high - low) / ADJUST_STEPS
    value = max(low, min(high, value))
    if name == "population":
        value = float(round_half_up(value))
    setattr(config, name, value)
    return value


class Simulation:
    """
    Interactive flock simulation with pygame visualization.

    Supports keyboard controls for adjusting simulation parameters
    in real-time between steps.
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        """
        Initialize the simulation.

        Args:
            config: Simulation configuration (population sized from the
                    window if None)
        """
        pygame.init()

        width = config.screenWidth if config else SimulationConfig.screenWidth
        height = config.screenHeight if config else SimulationConfig.screenHeight

        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Boids")
        self.viewport = PygameViewport(self.screen)

        self.config = config if config else SimulationConfig.for_viewport(width, height)
        self.clock = PygameClock(self.config.fpsTarget)
        self.flock = FlockSimulation(self.viewport, self.config)

        self.font = pygame.font.Font(None, 22)
        self.selected = 0
        self.running = True

    def update(self) -> None:
        """Update simulation state for one frame."""
        self.flock.step(self.config, self.clock.elapsed_since_last_step())

    def draw(self) -> None:
        """Render the current frame."""
        self.screen.fill(self.config.backgroundColor)

        for boid in self.flock.prey:
            pygame.draw.polygon(self.screen, to_rgba(boid.color), triangle_points(boid, PREY_SIZE))

        for predator in self.flock.predators:
            pygame.draw.polygon(self.screen, to_rgba(predator.color),
                                triangle_points(predator, PREDATOR_SIZE))

        self._draw_panel()

        pygame.display.flip()

    def _draw_panel(self) -> None:
        """Draw the settings overlay."""
        panel = pygame.Surface(PANEL_SIZE, pygame.SRCALPHA)
        panel.fill(to_rgba(PANEL_COLOR))
        self.screen.blit(panel, (0, 0))

        lines = [
            ("PAUSED (space to start)" if self.config.paused else "Running (space to pause)", False),
            (f"Predator: {'ON' if self.config.predator else 'OFF'} (p)", False),
        ]
        for i, name in enumerate(ADJUSTABLE):
            value = getattr(self.config, name)
            lines.append((f"{name}: {value:.1f}", i == self.selected))
        lines.append((f"FPS: {int(self.clock.get_fps())}  Boids: {len(self.flock.prey)}", False))

        y_offset = 8
        for text, selected in lines:
            surface = self.font.render(text, True, SELECTED_COLOR if selected else TEXT_COLOR)
            self.screen.blit(surface, (10, y_offset))
            y_offset += 20

    def save_settings(self) -> None:
        """Save the current settings to a JSON file."""
        try:
            self.config.save(self.config.settingsOutputFile)
            print(f"Settings saved to {self.config.settingsOutputFile}")
        except OSError as e:
            logger.error("Could not save settings to %s: %s", self.config.settingsOutputFile, e)
            print(f"Error saving settings: {e}")

    def run(self) -> None:
        """Run the simulation main loop."""
        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event.key)

            self.update()
            self.draw()
            self.clock.tick()

        pygame.quit()
        sys.exit()

    def _handle_keydown(self, key: int) -> None:
        """Handle keyboard input."""
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            self.config.paused = not self.config.paused
        elif key == pygame.K_p:
            self.config.predator = not self.config.predator
            print(f"Predator: {'ON' if self.config.predator else 'OFF'}")
        elif key == pygame.K_TAB:
            self.selected = (self.selected + 1) % len(ADJUSTABLE)
        elif key in (pygame.K_RIGHT, pygame.K_UP):
            adjust_parameter(self.config, ADJUSTABLE[self.selected], +1)
        elif key in (pygame.K_LEFT, pygame.K_DOWN):
            adjust_parameter(self.config, ADJUSTABLE[self.selected], -1)
        elif key == pygame.K_s:
            self.save_settings()
