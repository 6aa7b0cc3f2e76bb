# Copyright (c) 2025 Marc Schütze <scharc@gmail.com>
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""with-machine - Run commands in an environment defined by docker-machine."""

__version__ = "0.1.0"
