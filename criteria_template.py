# criteria_template.py
# Read-only evaluation template: criteria -> sub-criteria -> questions

import json
import logging
from types import MappingProxyType

from flask import current_app

logger = logging.getLogger(__name__)

STRICTNESS_MUST = 'must'
STRICTNESS_SHOULD = 'should'
STRICTNESS_LEVELS = (STRICTNESS_MUST, STRICTNESS_SHOULD)


class TemplateFormatError(ValueError):
    pass


class CriteriaTemplate:
    """
    The canonical structure every evaluation is built from.

    Loaded once when the application is created. If the file is missing or
    malformed the template is simply empty, so the API keeps serving and
    returns empty/partial results instead of failing.
    """

    def __init__(self, criteria=()):
        self._criteria = _freeze(list(criteria))

    @classmethod
    def load(cls, path):
        try:
            with open(path, encoding='utf-8') as fh:
                data = json.load(fh)
            criteria = _validate(data)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and TemplateFormatError are both ValueError
            logger.error('Error loading criteria data from %s: %s', path, e)
            return cls()

        logger.info('Criteria data loaded successfully (%d criteria)', len(criteria))
        return cls(criteria)

    @property
    def criteria(self):
        return self._criteria

    def __len__(self):
        return len(self._criteria)

    def criterion(self, index):
        if 0 <= index < len(self._criteria):
            return self._criteria[index]
        return None

    def sub_criterion(self, criterion_index, sub_index):
        criterion = self.criterion(criterion_index)
        if criterion is None:
            return None
        sub_criteria = criterion['sub_criteria']
        if 0 <= sub_index < len(sub_criteria):
            return sub_criteria[sub_index]
        return None

    def question_count(self, criterion_index, sub_index):
        sub = self.sub_criterion(criterion_index, sub_index)
        return len(sub['questions']) if sub is not None else None

    def strictness(self, criterion_index):
        criterion = self.criterion(criterion_index)
        if criterion is None:
            return None
        return criterion.get('type', STRICTNESS_MUST)

    def as_json(self):
        # Plain, JSON-serialisable copy for the API
        return _thaw(self._criteria)


def _validate(data):
    if not isinstance(data, list):
        raise TemplateFormatError('template root must be a list of criteria')

    for i, criterion in enumerate(data):
        if not isinstance(criterion, dict) or not isinstance(criterion.get('title'), str):
            raise TemplateFormatError(f'criterion {i} must be an object with a title')
        if criterion.get('type', STRICTNESS_MUST) not in STRICTNESS_LEVELS:
            raise TemplateFormatError(f'criterion {i} has unknown type {criterion.get("type")!r}')
        sub_criteria = criterion.get('sub_criteria')
        if not isinstance(sub_criteria, list):
            raise TemplateFormatError(f'criterion {i} must have a sub_criteria list')
        for j, sub in enumerate(sub_criteria):
            if not isinstance(sub, dict) or not isinstance(sub.get('text'), str):
                raise TemplateFormatError(f'sub-criterion {i}.{j} must be an object with text')
            if not isinstance(sub.get('questions'), list):
                raise TemplateFormatError(f'sub-criterion {i}.{j} must have a questions list')

    return data


def _freeze(value):
    # Read-only views: mappings become proxies, lists become tuples
    if isinstance(value, dict):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value):
    if isinstance(value, MappingProxyType):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


def get_template():
    return current_app.extensions['criteria_template']
