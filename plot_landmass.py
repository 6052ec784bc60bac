"""Plot island land masks, heightfields and a take-off climb for each scenario."""

from dataclasses import replace

import matplotlib.pyplot as plt
import numpy as np
import jax.numpy as jnp

from skerry.core.config import AircraftConfig
from skerry.core.primitives import FLOAT_DTYPE
from skerry.core.scenario import SCENARIOS, get_scenario
from skerry.core.simulation import rollout, spawn_aircraft
from skerry.core.state import ControlInput
from skerry.core.terrain import sample_minimap, terrain_height_at

# Configuration
resolution = 160  # Samples per side for the height plots
dt = 1.0 / 60.0  # 60 Hz frame rate
climb_time = 20.0  # 20 seconds of full throttle and nose-up stick
num_steps = int(climb_time / dt)

fig, axes = plt.subplots(3, len(SCENARIOS), figsize=(5 * len(SCENARIOS), 14))
fig.suptitle('Procedural Island Scenarios', fontsize=14)

for col, name in enumerate(SCENARIOS):
    scenario = get_scenario(name)
    terrain = replace(scenario.simulation.terrain, minimap_samples=resolution)
    extent = (-terrain.size / 2, terrain.size / 2, -terrain.size / 2, terrain.size / 2)

    # Shore blend as seen on the minimap
    ax = axes[0, col]
    minimap = np.asarray(sample_minimap(terrain))
    ax.imshow(minimap, origin='lower', extent=extent, cmap='Greens', vmin=0.0, vmax=1.0)
    ax.set_title(f'{name}: shore blend')
    ax.set_xlabel('X (m)')
    ax.set_ylabel('Z (m)')

    # Terrain elevation on the same grid
    ax = axes[1, col]
    coords = jnp.linspace(-terrain.size / 2, terrain.size / 2, resolution, dtype=FLOAT_DTYPE)
    grid_z, grid_x = jnp.meshgrid(coords, coords, indexing='ij')
    heights = np.asarray(terrain_height_at(grid_x, grid_z, terrain))
    image = ax.imshow(heights, origin='lower', extent=extent, cmap='terrain')
    fig.colorbar(image, ax=ax, label='Height (m)')
    ax.contour(
        np.asarray(grid_x), np.asarray(grid_z), heights,
        levels=[0.0], colors='k', linewidths=0.8,
    )
    ax.plot(*scenario.spawn_position[::2], 'r^', markersize=8, label='Spawn')
    ax.set_title(f'{name}: elevation')
    ax.set_xlabel('X (m)')
    ax.set_ylabel('Z (m)')
    ax.legend(loc='upper right', fontsize=9)

    # Take-off roll and climb with the scenario's aircraft
    aircraft = spawn_aircraft(
        jnp.asarray(scenario.spawn_position, dtype=FLOAT_DTYPE),
        scenario.simulation.aircraft,
        scenario.spawn_heading,
    )
    _, history = rollout(
        aircraft,
        ControlInput.create(pitch=0.3, throttle_up=True),
        jnp.array(False),
        jnp.array(True),
        scenario.simulation,
        jnp.array(dt, dtype=FLOAT_DTYPE),
        num_steps,
    )
    history = np.asarray(history)
    time_points = np.arange(1, num_steps + 1) * dt

    ax = axes[2, col]
    ax.plot(time_points, history[:, 1], 'b-', linewidth=1.5, label='Altitude (m)')
    ax.plot(time_points, history[:, 3], 'g-', linewidth=1.5, label='Speed (m/s)')
    ax.axhline(
        y=AircraftConfig().takeoff_speed, color='g', linestyle='--', alpha=0.4,
        label='Take-off speed',
    )
    ax2 = ax.twinx()
    ax2.plot(time_points, history[:, 4], 'r-', linewidth=1.0, alpha=0.6)
    ax2.set_ylabel('Throttle', color='r')
    ax2.set_ylim(0.0, 1.05)
    ax.set_xlabel('Time (s)')
    ax.set_title(f'{name}: take-off climb')
    ax.legend(loc='upper left', fontsize=9)
    ax.grid(True, alpha=0.3)

plt.tight_layout()
plt.savefig('landmass_scenarios.png', dpi=150, bbox_inches='tight')
plt.show()

# Print statistics
print("\nLandmass Statistics:")
print("=" * 50)
for name in SCENARIOS:
    terrain = get_scenario(name).simulation.terrain
    minimap = np.asarray(sample_minimap(terrain))
    print(f"{name}:")
    print(f"  Land fraction: {np.mean(minimap > 0.5):.3f}")
    print(f"  Spawn height:  {float(terrain_height_at(0.0, 0.0, terrain)):.2f} m")
