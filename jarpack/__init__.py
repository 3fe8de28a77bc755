# jarpack - Java archive packaging for Python-based builds
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
jarpack is a Python-based build tool for packaging Java archives (.jar, .war, .aar, .ear and .zip), with
declarative manifests, EAR assembly and automatic ``Class-Path`` reconciliation of EAR components.

Build files are Python scripts (``root.jarpack.py``) which define properties and targets;
run them with ``python -m jarpack``.
"""
