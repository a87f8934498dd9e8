"""
PediaCalc: pediatric clinical calculation & decision-support engine.

Weight-based dosing, drug interaction screening, prescription editing
sessions, fluid therapy, nutritional z-scores, respiratory scores,
vital-sign ranges and ward tracking helpers.

WARNING: Decision support only. Every result must be reviewed by a
clinician before use.
"""

from pediacalc.constants import VERSION

__version__ = VERSION
