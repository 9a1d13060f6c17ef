"""Demo: sample the default Hindmarsh-Rose neuron and summarize the result."""

import numpy as np

from hrtrace.models.hindmarsh_rose import (
    COMPONENT_LABELS,
    HRComponent,
    HindmarshRose,
    request_from_controls,
)
from hrtrace.stepping.components import peak_amplitude
from hrtrace.stepping.sampler import TrajectorySampler
from hrtrace.utils.log_config import setup_logging

logger = setup_logging()

sampler = TrajectorySampler(HindmarshRose())

# Two snapshots, as produced by moving the current control
for current in (2.9, 3.25):
    request = request_from_controls({"I": current, "t": 500.0})
    traj = sampler.run(request)

    gaps = np.diff(traj.times)
    logger.info("I = %.2f: %s, %d samples, max gap %.4f", current, traj.status.name, len(traj), gaps.max())

    for component, label in COMPONENT_LABELS.items():
        logger.info("  peak |%s| = %.4f", label, peak_amplitude(traj, component))

    spikes = np.count_nonzero(np.diff(np.sign(traj.component(0))) > 0)
    logger.info("  upward zero crossings of x: %d", spikes)
    logger.info("  visible scale basis (x, z): %.4f", peak_amplitude(traj, HRComponent.X | HRComponent.Z))
