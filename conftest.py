"""Expand testscenarios ``scenarios`` into one test class per scenario.

pytest rebinds the test method onto the original TestCase instance before
calling ``run()``, so the per-scenario clones made by ``WithScenarios.run``
would execute the test against an instance that never ran ``setUp``.
"""
import unittest

from _pytest.unittest import UnitTestCase


class ScenarioTestCase(UnitTestCase):
    """Collector for a generated per-scenario class (not a module attribute)."""

    def _getobj(self):
        return self._scenario_cls


def pytest_pycollect_makeitem(collector, name, obj):
    if not (isinstance(obj, type) and issubclass(obj, unittest.TestCase)):
        return None
    scenarios = getattr(obj, 'scenarios', None)
    if not scenarios:
        return None
    items = []
    for scenario_name, params in scenarios:
        attrs = dict(params)
        attrs['scenarios'] = None
        attrs['__module__'] = obj.__module__
        sub = type(obj)('{0}[{1}]'.format(name, scenario_name), (obj,), attrs)
        item = ScenarioTestCase.from_parent(
            collector, name='{0}[{1}]'.format(name, scenario_name), obj=sub)
        item._scenario_cls = sub
        items.append(item)
    return items
