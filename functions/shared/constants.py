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

# Stories disappear a day after they are posted.
STORY_TTL_SECONDS = 24 * 60 * 60

# Content that replaces a private message deleted for everyone.
DELETED_MESSAGE_PLACEHOLDER = "Este mensaje fue eliminado"

# Display names used when the author profile of a row is missing.
DEFAULT_STUDENT_NAME = "Usuario"
DEFAULT_DRIVER_NAME = "Conductor"

DEFAULT_IMAGE_ANALYSIS_PROMPT = "Analiza esta imagen y describe lo que ves en detalle."

# Storage buckets the client is allowed to sign URLs for.
MEDIA_BUCKETS = (
    "posts-media",
    "profile-images",
    "project-images",
    "private-chat-media",
    "group-media",
    "group-backgrounds",
)

MAX_POST_LENGTH = 5000
MAX_COMMENT_LENGTH = 2000
MAX_MESSAGE_LENGTH = 4000
MAX_ASSISTANT_MESSAGE_LENGTH = 8000

# Every new group starts with this text channel.
DEFAULT_CHANNEL_NAME = "general"
DEFAULT_CHANNEL_DESCRIPTION = "Canal general para conversaciones"
