"""
Correlation engine packages for dni-list

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.correlation import CorrelationEngine, EngineSettings
from engine.decoder import BatchDecodeError, decode_batch
from engine.hostname import is_valid_hostname

__all__ = ["CorrelationEngine", "EngineSettings", "BatchDecodeError", "decode_batch", "is_valid_hostname"]
