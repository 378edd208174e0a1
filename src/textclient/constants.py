# Copyright 2021-2025, Francis Clairicia-Rose-Claire-Josephine
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
"""textclient's constants module."""

from __future__ import annotations

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_RECEIVE_BUFSIZE",
    "MAX_PORT_NUMBER",
]

from typing import Final

# Server used when no --host is given
DEFAULT_HOST: Final[str] = "127.0.0.1"

# Server port used when no --port is given
DEFAULT_PORT: Final[str] = "8080"

MAX_PORT_NUMBER: Final[int] = 65535

# Buffer size for the single recv(2) operation
DEFAULT_RECEIVE_BUFSIZE: Final[int] = 1024  # 1KiB
