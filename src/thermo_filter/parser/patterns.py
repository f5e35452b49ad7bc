"""
Compiled filter text patterns.

Module-level constants, compiled once at import and never mutated, so the
parsing functions can be called from any thread.
"""

import re

from thermo_filter.config import (
    COLLISION_SPEC_REGEX,
    ION_MODE_REGEX,
    MASS_LIST_REGEX,
    MASS_RANGES_REGEX,
    MS_LEVEL_REGEX,
    MZ_WITHOUT_COLLISION_ENERGY_REGEX,
    PARENT_ION_ONLY_MSX_REGEX,
    PARENT_ION_ONLY_NON_MSX_REGEX,
    PARENT_ION_REGEX,
)

MS_LEVEL_PATTERN = re.compile(MS_LEVEL_REGEX, re.IGNORECASE)

ION_MODE_PATTERN = re.compile(ION_MODE_REGEX)

MASS_LIST_PATTERN = re.compile(MASS_LIST_REGEX)

MASS_RANGES_PATTERN = re.compile(MASS_RANGES_REGEX)

PARENT_ION_PATTERN = re.compile(PARENT_ION_REGEX, re.IGNORECASE)

PARENT_ION_ONLY_NON_MSX_PATTERN = re.compile(PARENT_ION_ONLY_NON_MSX_REGEX, re.IGNORECASE)

PARENT_ION_ONLY_MSX_PATTERN = re.compile(PARENT_ION_ONLY_MSX_REGEX, re.IGNORECASE)

COLLISION_SPEC_PATTERN = re.compile(COLLISION_SPEC_REGEX)

MZ_WITHOUT_COLLISION_ENERGY_PATTERN = re.compile(MZ_WITHOUT_COLLISION_ENERGY_REGEX)

# Leading run of digits and decimal points, for bare parent ion m/z values
LEADING_NUMBER_PATTERN = re.compile(r"^[0-9.]+")
