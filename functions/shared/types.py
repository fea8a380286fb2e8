# Copyright 2025 Google LLC
#
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
# ==============================================================================

from enum import Enum


class RideStatus(Enum):
    """Lifecycle of a ride request or ride offer."""

    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class MatchStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class FriendRequestStatus(Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class DeleteScope(Enum):
    """Who a private message is deleted for."""

    ME = "me"
    EVERYONE = "everyone"


class GroupRole(Enum):
    ADMIN = "admin"
    MEMBER = "member"


class ChannelType(Enum):
    TEXT = "text"
    VOICE = "voice"
