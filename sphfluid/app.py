"""Interactive window that runs and draws the particle fluid."""

from __future__ import annotations

import argparse
import logging
import sys
import time

from sphfluid.particle_system import ParticleSystem, Vec2

logger = logging.getLogger(__name__)

SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
MAX_TIME_STEP = 0.016
DEFAULT_PARTICLES = 5000
PARTICLE_BATCH = 100
BACKGROUND = (25, 25, 25)

CONTROLS = """
Controls:
  Left mouse button: Interact with fluid
  Space: Pause/resume simulation
  R: Reset simulation
  G: Toggle CPU/GPU computation (if CUDA is enabled)
  +/-: Add/remove particles
"""


def screen_to_simulation(x: float, y: float, screen_width: int, screen_height: int) -> Vec2:
    """Map a window pixel position (origin top-left) to simulation coordinates.

    The simulation spans 2.0 units horizontally and keeps the window's aspect
    ratio vertically, with y pointing up.
    """
    sim_x = x / screen_width * 2.0
    sim_y = (screen_height - y) / screen_height * 2.0 * screen_height / screen_width
    return (sim_x, sim_y)


class SimulationState:
    """The user-controlled state around a particle system: pause, mode and edits."""

    def __init__(self, system: ParticleSystem) -> None:
        self.system = system
        self.paused = False
        self.use_cpu = True
        self._actions = {
            "space": self._toggle_pause,
            "r": self._reset,
            "g": self._toggle_backend,
            "=": lambda: self.system.add_particles(PARTICLE_BATCH),
            "-": lambda: self.system.remove_particles(PARTICLE_BATCH),
        }

    def _toggle_pause(self) -> None:
        self.paused = not self.paused

    def _reset(self) -> None:
        self.system.reset()
        logger.info("Simulation reset")

    def _toggle_backend(self) -> None:
        self.use_cpu = not self.use_cpu
        logger.info("Using %s implementation", "CPU" if self.use_cpu else "GPU")

    def handle_key(self, key: str) -> bool:
        """Apply the action bound to a key name; return whether the key is bound."""
        action = self._actions.get(key.lower())
        if action is None:
            return False
        action()
        return True

    def step(self, dt: float, mouse_pos: Vec2, mouse_pressed: bool) -> bool:
        """Advance the system unless paused; the time step is capped for stability."""
        if self.paused:
            return False
        self.system.update(min(dt, MAX_TIME_STEP), mouse_pos, mouse_pressed)
        return True


def _draw(surface, system: ParticleSystem, pygame) -> None:
    width, height = surface.get_size()
    scale = width / 2.0
    surface.fill(BACKGROUND)
    for particle in system.particles:
        x, y = particle.position
        r, g, b, _alpha = particle.color
        centre = (int(x * scale), int(height - y * scale))
        radius = max(1, int(particle.radius * scale * 0.5))
        colour = (int(r * 255), int(g * 255), int(b * 255))
        pygame.draw.circle(surface, colour, centre, radius)


def main(argv: list[str] | None = None) -> int:
    """Open the simulation window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="sphfluid", description="2D SPH fluid simulation")
    parser.add_argument("--particles", type=int, default=DEFAULT_PARTICLES,
                        help="number of particles to start with")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    import pygame

    print("Starting Fluid Simulation...")
    pygame.init()
    try:
        try:
            screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        except pygame.error as exc:
            print(f"Failed to create window! {exc}", file=sys.stderr)
            return 1
        pygame.display.set_caption("Fluid Simulation")
        print("Window created successfully!")

        print("Initializing particle system...")
        system = ParticleSystem(
            args.particles, 2.0, 2.0 * SCREEN_HEIGHT / SCREEN_WIDTH, seed=args.seed
        )
        print(f"Particle system initialized with {len(system)} particles")
        print(CONTROLS)
        print("Starting simulation loop...")

        state = SimulationState(system)
        mouse_pos = (0.0, 0.0)
        mouse_pressed = False
        last_frame = time.perf_counter()
        running = True

        while running:
            now = time.perf_counter()
            dt = now - last_frame
            last_frame = now

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        state.handle_key(pygame.key.name(event.key))
                elif event.type == pygame.MOUSEMOTION:
                    mouse_pos = (float(event.pos[0]), float(event.pos[1]))
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    mouse_pressed = True
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    mouse_pressed = False

            sim_mouse = screen_to_simulation(*mouse_pos, SCREEN_WIDTH, SCREEN_HEIGHT)
            state.step(dt, sim_mouse, mouse_pressed)

            _draw(screen, system, pygame)
            pygame.display.flip()

        print("Cleaning up...")
    finally:
        pygame.quit()
    print("Simulation ended successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())