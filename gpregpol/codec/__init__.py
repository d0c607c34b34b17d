# SPDX-License-Identifier: LGPL-3.0-or-later
# gpregpol/codec/__init__.py
"""
Registry.pol binary codec.

- constants: format constants, RegistryValueKind
- integers: little-endian integer coder
- multistring: REG_MULTI_SZ splitting/joining
- values: per-type payload codec
- header: 8-byte header validate/emit
- entry: single entry decode/encode
- file: whole-buffer decode/encode
"""
