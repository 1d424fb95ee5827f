# Copyright 2026 Firefly Software Solutions Inc.
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
"""Tests for the import surface of the CORS engine."""

import subprocess
import sys

import flycors.cors


class TestCorePackage:
    def test_exports_engine_types(self):
        assert "CorsPolicy" in flycors.cors.__all__
        assert "CorsBuilder" in flycors.cors.__all__
        assert "CorsProperties" not in flycors.cors.__all__

    def test_import_does_not_load_host_or_config_libraries(self):
        code = (
            "import sys, flycors.cors\n"
            "loaded = [m for m in ('pydantic', 'yaml', 'starlette') if m in sys.modules]\n"
            "assert not loaded, loaded\n"
        )
        result = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True)
        assert result.returncode == 0, result.stderr
