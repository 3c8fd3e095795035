"""
CdA sensitivity of the engine power estimate for one reference run.

Left: engine power point estimate vs CdA with the worst-case band from
estimate_range() (relative CdA margin, default margins otherwise).
Right: the energy breakdown (kinetic / drag / rolling / grade) vs CdA.

Run from repo root with PYTHONPATH=. (e.g. PYTHONPATH=. python scripts/plot_cda_sensitivity.py).
Reference run is the 1400 kg, 100 -> 200 km/h in 10 s / 350 m fixture.
"""

from dataclasses import replace

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from physics.power import EstimatorInput, estimate_power
from physics.uncertainty import estimate_range
from physics.units import watts_to_hp

BASE = EstimatorInput(
    mass_kg=1400.0,
    v1_kmh=100.0,
    v2_kmh=200.0,
    time_s=10.0,
    distance_m=350.0,
    grade_pct=0.0,
    rho=1.20,
    cda=0.68,
    crr=0.015,
    eta=0.86,
)


def main():
    cdas = np.linspace(0.45, 0.95, 51)

    point_hp = []
    low_hp = []
    high_hp = []
    terms = {"kinetic": [], "drag": [], "rolling": [], "grade": []}

    for cda in cdas:
        run = replace(BASE, cda=float(cda))
        res = estimate_power(run)
        rng = estimate_range(run)
        point_hp.append(watts_to_hp(res.engine_power_w))
        low_hp.append(watts_to_hp(rng.min_engine_w))
        high_hp.append(watts_to_hp(rng.max_engine_w))
        b = res.breakdown
        terms["kinetic"].append(b.de_j / 1e3)
        terms["drag"].append(b.e_drag_j / 1e3)
        terms["rolling"].append(b.e_roll_j / 1e3)
        terms["grade"].append(b.e_grade_j / 1e3)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.fill_between(cdas, low_hp, high_hp, color='steelblue', alpha=0.25,
                     label='Worst-case range')
    ax1.plot(cdas, point_hp, '-', color='navy', linewidth=2.5,
             label='Point estimate')
    ax1.axvline(BASE.cda, color='gray', linestyle='--', linewidth=1)
    ax1.set_xlabel('CdA [m^2]')
    ax1.set_ylabel('Engine power [hp]')
    ax1.set_title('Engine power vs CdA')
    ax1.legend(loc='upper left', fontsize=8)
    ax1.grid(True, alpha=0.3)

    ax2.stackplot(cdas, terms["kinetic"], terms["drag"], terms["rolling"],
                  terms["grade"], labels=list(terms), alpha=0.8)
    ax2.set_xlabel('CdA [m^2]')
    ax2.set_ylabel('Energy [kJ]')
    ax2.set_title('Energy breakdown over the run')
    ax2.legend(loc='upper left', fontsize=8)
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    out_path = 'scripts/cda_sensitivity.png'
    plt.savefig(out_path, dpi=150, bbox_inches='tight')
    plt.close()
    print('Saved: %s' % out_path)


if __name__ == '__main__':
    main()
