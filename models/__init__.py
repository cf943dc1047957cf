# models/__init__.py
# Model registry

from .evaluation import Evaluation, utcnow
from .criterion import Criterion
from .sub_criterion import SubCriterion
from .response import Response
