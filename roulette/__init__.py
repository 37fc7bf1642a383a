"""
Weighted roulette picker.

This module provides the weighted sampler behind the wheel, a repeated-trial
simulation to check it against the theoretical odds, and the option list and
wheel geometry used by the picker scripts.
"""

from .errors import InvalidInput
from .options import Option, OptionsConfig, parse_weight, normalize_options, validate_options, MIN_OPTIONS, MAX_OPTIONS
from .sampler import weighted_random, use_seed, derive_seed
from .trials import run_trials, simulate, theoretical_percentages, expected_shares, SimulationReport, TRIAL_COUNT
from .wheel import sectors, spin_target, PALETTE
from .board import OptionBoard, SpinResult

__all__ = [
    'InvalidInput',
    'Option',
    'OptionsConfig',
    'parse_weight',
    'normalize_options',
    'validate_options',
    'MIN_OPTIONS',
    'MAX_OPTIONS',
    'weighted_random',
    'use_seed',
    'derive_seed',
    'run_trials',
    'simulate',
    'theoretical_percentages',
    'expected_shares',
    'SimulationReport',
    'TRIAL_COUNT',
    'sectors',
    'spin_target',
    'PALETTE',
    'OptionBoard',
    'SpinResult',
]
