# sphfluid

A small two-dimensional fluid simulation built on smoothed-particle
hydrodynamics (SPH). A block of water-coloured particles falls under
gravity into a box, where it splashes and settles. You can stir it with
the mouse.

## Installation

```
pip install .
```

This also installs pygame, which opens the window and draws the particles.

## Running

```
sphfluid
```

Options:

- `--particles N` sets how many particles to start with (default 5000).
- `--seed N` seeds the random placement of the particles.

The simulation runs in pure Python, so a smaller particle count gives a
smoother frame rate, for example `sphfluid --particles 800`.

Progress messages, the average update time (every 100 steps) and the
particle count after adding or removing particles are written to the log
on standard error.

### Controls

| Input             | Action                                   |
|-------------------|------------------------------------------|
| Left mouse button | Push and drag the fluid                  |
| Space             | Pause or resume the simulation           |
| R                 | Reset the simulation                     |
| G                 | Switch the reported CPU/GPU mode         |
| =                 | Add 100 particles                        |
| -                 | Remove 100 particles                     |
| Escape            | Quit                                     |

## Using the library

The simulation can also be run without a window:

```python
from sphfluid.particle_system import ParticleSystem

system = ParticleSystem(500, 2.0, 1.125, seed=42)
for _ in range(60):
    system.update(0.016, (1.0, 0.5), False)

print(len(system), "particles")
```

Each step of `ParticleSystem.update` does the following:

1. Sorts the particles into a uniform grid (`update_grid`).
2. Finds each particle's neighbours within the smoothing radius (`find_neighbors`).
3. Computes density and pressure (`calculate_density_pressure`).
4. Computes pressure, viscosity, surface-tension, cohesion and gravity
   forces (`calculate_forces`).
5. Applies the mouse force if the button is held (`apply_mouse_force`).
6. Integrates with semi-implicit Euler (`integrate`).
7. Clamps the particles to the container walls (`handle_boundaries`).

`reset`, `add_particles` and `remove_particles` change the set of
particles; each particle is a `Particle` dataclass in
`ParticleSystem.particles`.

The smoothing kernels and the physical constants are available on their
own in `sphfluid.kernels`: `kernel_poly6`, `kernel_spiky_gradient` and
`kernel_viscosity`.

`sphfluid.app.screen_to_simulation` converts window pixel coordinates
into simulation space. `sphfluid.app.SimulationState` holds the pause
state and maps key names to actions (`handle_key`) and advances the
system with a capped time step (`step`), so it can be driven without a
window.

## What it does not do

All computation runs on the CPU in Python. There is no GPU backend: the
G key only flips the reported mode and has no effect on the simulation.
Particles are drawn as plain circles with pygame; there are no shaders.