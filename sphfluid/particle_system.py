"""A 2D smoothed-particle-hydrodynamics fluid held in a rectangular container."""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field

from sphfluid.kernels import (
    GRAVITY,
    PARTICLE_MASS,
    PRESSURE_CONSTANT,
    REST_DENSITY,
    RESTITUTION,
    SMOOTHING_RADIUS,
    VISCOSITY,
    kernel_poly6,
    kernel_spiky_gradient,
    kernel_viscosity,
)

logger = logging.getLogger(__name__)

Vec2 = tuple[float, float]
Color = tuple[float, float, float, float]

GRID_SIZE = 20
PARTICLE_RADIUS = 0.03
PARTICLE_SPACING = SMOOTHING_RADIUS * 0.2
OFFSET_JITTER = 0.002
TIMING_REPORT_FRAMES = 100


def _length(v: Vec2) -> float:
    return math.hypot(v[0], v[1])


def _clamp_length(v: Vec2, limit: float) -> Vec2:
    """Scale ``v`` down to ``limit`` if it is longer than that."""
    length = _length(v)
    if length > limit:
        scale = limit / length
        return (v[0] * scale, v[1] * scale)
    return v


@dataclass
class Particle:
    """One fluid particle and the quantities the solver tracks for it."""

    position: Vec2 = (0.0, 0.0)
    velocity: Vec2 = (0.0, 0.0)
    force: Vec2 = (0.0, 0.0)
    density: float = 0.0
    pressure: float = 0.0
    color: Color = (1.0, 1.0, 1.0, 1.0)
    radius: float = 0.01
    neighbors: list[int] = field(default_factory=list)


class ParticleSystem:
    """SPH particle system with grid-based neighbour search and simple boundaries."""

    def __init__(
        self,
        max_particles: int,
        width: float,
        height: float,
        seed: int | None = None,
    ) -> None:
        self.width = float(width)
        self.height = float(height)
        self.cell_size = SMOOTHING_RADIUS
        self.capacity = max(0, int(max_particles))
        self.particles: list[Particle] = []
        self.grid: list[list[int]] = [[] for _ in range(GRID_SIZE * GRID_SIZE)]
        self._rng = random.Random(seed)
        self._prev_mouse_pos: Vec2 | None = None
        self._frame_count = 0
        self._total_time_ms = 0.0
        self._populate()

    def __len__(self) -> int:
        return len(self.particles)

    # -- construction ---------------------------------------------------

    def _water_color(self) -> Color:
        blue_variation = 0.03 * self._rng.random()
        return (0.1, 0.3 + blue_variation, 0.9, 0.98)

    def _populate(self) -> None:
        """Fill the system up to its capacity with a jittered block of fluid."""
        spacing = PARTICLE_SPACING
        columns = int(self.width * 0.35 / spacing)
        rows = int(self.height * 0.35 / spacing)
        start_x = self.width * 0.35
        start_y = self.height * 0.6

        for i in range(columns):
            if len(self.particles) >= self.capacity:
                break
            for j in range(rows):
                if len(self.particles) >= self.capacity:
                    break
                x = start_x + i * spacing + self._rng.uniform(-OFFSET_JITTER, OFFSET_JITTER)
                y = start_y + j * spacing + self._rng.uniform(-OFFSET_JITTER, OFFSET_JITTER)
                self.particles.append(
                    Particle(position=(x, y), color=self._water_color(), radius=PARTICLE_RADIUS)
                )

        x_range = (start_x - spacing * 0.5, start_x + columns * spacing * 1.1)
        y_range = (start_y - spacing * 0.5, start_y + rows * spacing * 1.1)
        while len(self.particles) < self.capacity:
            pos = (self._rng.uniform(*x_range), self._rng.uniform(*y_range))
            self.particles.append(
                Particle(position=pos, color=self._water_color(), radius=PARTICLE_RADIUS)
            )

    # -- public control -------------------------------------------------

    def update(self, dt: float, mouse_pos: Vec2, mouse_pressed: bool) -> None:
        """Advance the simulation by ``dt`` seconds."""
        start = time.perf_counter()

        self.update_grid()
        self.find_neighbors()
        self.calculate_density_pressure()
        self.calculate_forces()
        if mouse_pressed:
            self.apply_mouse_force(mouse_pos, mouse_pressed)
        self.integrate(dt)
        self.handle_boundaries()

        self._total_time_ms += (time.perf_counter() - start) * 1000.0
        self._frame_count += 1
        if self._frame_count >= TIMING_REPORT_FRAMES:
            logger.info("Average update time: %g ms", self._total_time_ms / self._frame_count)
            self._total_time_ms = 0.0
            self._frame_count = 0

    def reset(self) -> None:
        """Discard all particles and rebuild the initial fluid block."""
        self.particles.clear()
        self._populate()
        logger.info("Simulation reset with %d particles", len(self.particles))

    def add_particles(self, count: int) -> None:
        """Add ``count`` particles scattered around the current centre of mass."""
        if self.particles:
            n = len(self.particles)
            center = (
                sum(p.position[0] for p in self.particles) / n,
                sum(p.position[1] for p in self.particles) / n,
            )
        else:
            center = (self.width * 0.5, self.height * 0.75)

        spread = SMOOTHING_RADIUS * 5.0
        for _ in range(count):
            angle = self._rng.random() * 2.0 * 3.14159
            distance = self._rng.random() * spread
            x = center[0] + math.cos(angle) * distance
            y = center[1] + math.sin(angle) * distance
            x = max(0.1, min(self.width - 0.1, x))
            y = max(0.1, min(self.height - 0.1, y))
            self.particles.append(
                Particle(position=(x, y), color=self._water_color(), radius=PARTICLE_RADIUS)
            )

        self.capacity = max(self.capacity, len(self.particles))
        logger.info("Particle count: %d", len(self.particles))

    def remove_particles(self, count: int) -> None:
        """Remove up to ``count`` particles from the end of the list."""
        count = min(count, len(self.particles))
        if count > 0:
            del self.particles[len(self.particles) - count:]
            logger.info("Particle count: %d", len(self.particles))

    # -- physics --------------------------------------------------------

    def _cell_of(self, position: Vec2) -> tuple[int, int]:
        cell_x = int(position[0] / self.cell_size)
        cell_y = int(position[1] / self.cell_size)
        cell_x = max(0, min(cell_x, GRID_SIZE - 1))
        cell_y = max(0, min(cell_y, GRID_SIZE - 1))
        return cell_x, cell_y

    def update_grid(self) -> None:
        """Sort particle indices into the spatial grid."""
        for cell in self.grid:
            cell.clear()
        for index, particle in enumerate(self.particles):
            cell_x, cell_y = self._cell_of(particle.position)
            self.grid[cell_y * GRID_SIZE + cell_x].append(index)

    def find_neighbors(self) -> None:
        """Collect, for each particle, the indices of particles within the smoothing radius."""
        for particle in self.particles:
            particle.neighbors.clear()

        for i, particle in enumerate(self.particles):
            cell_x, cell_y = self._cell_of(particle.position)
            for dy in (-1, 0, 1):
                ny = cell_y + dy
                if not 0 <= ny < GRID_SIZE:
                    continue
                for dx in (-1, 0, 1):
                    nx = cell_x + dx
                    if not 0 <= nx < GRID_SIZE:
                        continue
                    for j in self.grid[ny * GRID_SIZE + nx]:
                        if i == j:
                            continue
                        other = self.particles[j].position
                        dist = math.hypot(
                            particle.position[0] - other[0], particle.position[1] - other[1]
                        )
                        if dist < SMOOTHING_RADIUS:
                            particle.neighbors.append(j)

    def calculate_density_pressure(self) -> None:
        """Compute density from neighbours and pressure from the equation of state."""
        for particle in self.particles:
            density = PARTICLE_MASS * kernel_poly6(0.0, SMOOTHING_RADIUS)
            for j in particle.neighbors:
                other = self.particles[j].position
                dist = math.hypot(
                    particle.position[0] - other[0], particle.position[1] - other[1]
                )
                density += PARTICLE_MASS * kernel_poly6(dist, SMOOTHING_RADIUS)
            particle.density = density
            particle.pressure = max(0.0, PRESSURE_CONSTANT * (density - REST_DENSITY))

    def calculate_forces(self) -> None:
        """Accumulate gravity, pressure, viscosity, surface tension and cohesion forces."""
        surface_tension_coeff = 0.8
        cohesion_strength = 0.3
        max_force = 120.0

        for particle in self.particles:
            fx, fy = 0.0, -GRAVITY * 0.8
            tension_x, tension_y = 0.0, 0.0
            px, py = particle.position

            for j in particle.neighbors:
                neighbor = self.particles[j]
                dx = px - neighbor.position[0]
                dy = py - neighbor.position[1]
                dist = math.hypot(dx, dy)
                if dist < 0.0001:
                    continue
                nx, ny = dx / dist, dy / dist

                pressure_gradient = (particle.pressure + neighbor.pressure) / (
                    2.0 * neighbor.density
                )
                pressure_mag = (
                    pressure_gradient * kernel_spiky_gradient(dist, SMOOTHING_RADIUS) * 1.2
                )
                fx += nx * pressure_mag
                fy += ny * pressure_mag

                viscosity_strength = (
                    VISCOSITY * kernel_viscosity(dist, SMOOTHING_RADIUS) / neighbor.density * 1.5
                )
                fx += (neighbor.velocity[0] - particle.velocity[0]) * viscosity_strength
                fy += (neighbor.velocity[1] - particle.velocity[1]) * viscosity_strength

                tension_mag = surface_tension_coeff * kernel_poly6(dist, SMOOTHING_RADIUS)
                tension_x += nx * tension_mag
                tension_y += ny * tension_mag

            fx += tension_x
            fy += tension_y

            for j in particle.neighbors:
                neighbor = self.particles[j]
                dx = neighbor.position[0] - px
                dy = neighbor.position[1] - py
                dist = math.hypot(dx, dy)
                if dist > 0.0001:
                    cohesion_mag = cohesion_strength * kernel_poly6(dist, SMOOTHING_RADIUS)
                    fx += dx / dist * cohesion_mag
                    fy += dy / dist * cohesion_mag

            particle.force = _clamp_length((fx, fy), max_force)

    def integrate(self, dt: float) -> None:
        """Semi-implicit Euler step with acceleration, damping and velocity limits."""
        max_accel = 50.0
        max_vel = 3.0
        for particle in self.particles:
            mass_density = max(particle.density, 0.0001)
            accel = _clamp_length(
                (particle.force[0] / mass_density, particle.force[1] / mass_density), max_accel
            )
            vx = (particle.velocity[0] + accel[0] * dt) * 0.95
            vy = (particle.velocity[1] + accel[1] * dt) * 0.95
            particle.velocity = _clamp_length((vx, vy), max_vel)
            particle.position = (
                particle.position[0] + particle.velocity[0] * dt,
                particle.position[1] + particle.velocity[1] * dt,
            )

    def handle_boundaries(self) -> None:
        """Keep particles inside the container, reflecting and damping their velocity."""
        for particle in self.particles:
            x, y = particle.position
            vx, vy = particle.velocity
            r = particle.radius

            if x < r:
                x, vx = r, vx * -RESTITUTION
            elif x > self.width - r:
                x, vx = self.width - r, vx * -RESTITUTION

            if y < r:
                y, vy = r, vy * -RESTITUTION
            elif y > self.height - r:
                y, vy = self.height - r, vy * -RESTITUTION

            particle.position = (x, y)
            particle.velocity = (vx, vy)

    def apply_mouse_force(self, mouse_pos: Vec2, mouse_pressed: bool) -> None:
        """Push particles near the mouse along its motion and away from it."""
        if not mouse_pressed:
            return

        mouse_pos = (float(mouse_pos[0]), float(mouse_pos[1]))
        if self._prev_mouse_pos is None:
            self._prev_mouse_pos = mouse_pos
        mouse_vx = (mouse_pos[0] - self._prev_mouse_pos[0]) * 5.0
        mouse_vy = (mouse_pos[1] - self._prev_mouse_pos[1]) * 5.0
        self._prev_mouse_pos = mouse_pos

        influence_radius = 0.3
        max_force = 1.5
        max_vel = 2.0

        for particle in self.particles:
            dx = particle.position[0] - mouse_pos[0]
            dy = particle.position[1] - mouse_pos[1]
            dist = math.hypot(dx, dy)
            if dist >= influence_radius:
                continue

            falloff = (1.0 - dist / influence_radius) ** 2
            dir_x, dir_y = (dx / dist, dy / dist) if dist > 0.0 else (0.0, 0.0)
            strength = falloff * max_force

            force_x = mouse_vx * 0.7 + dir_x * strength * 0.3
            force_y = mouse_vy * 0.7 + dir_y * strength * 0.3
            velocity = (
                particle.velocity[0] + force_x * 0.1,
                particle.velocity[1] + force_y * 0.1,
            )
            particle.velocity = _clamp_length(velocity, max_vel)