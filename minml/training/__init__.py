# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
minml training package.

Subsystems:
  - engine: batch gradient descent loop and its config/result values
  - metrics: per-epoch structured metrics
  - exceptions: training failure kinds
"""
