# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
minml data package.

  - dataset: immutable (feature, label) records backed by float64 tensors
  - csv_loader: strict two-column CSV ingestion
  - normalize: standardization as a separate preprocessing stage
"""
