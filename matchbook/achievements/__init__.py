# Import collectors so they register with the registry
from matchbook.achievements import collectors  # noqa: F401
from matchbook.achievements.evaluator import DEFINITIONS, compute_achievements  # noqa: F401
