# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
minml evaluation package.

Regression metrics (MSE, RMSE, MAE, R²) and a one-call evaluate(model, dataset).
"""
