# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
minml model package.

Models share one contract (interfaces.ModelBase): a pure predict(x), a
batched forward, per-parameter derivatives and a replaceable parameter
vector. That is all the gradient-descent trainer needs to fit them.

Built-in models:
  - linear_regression: y = weight * x + bias
"""
