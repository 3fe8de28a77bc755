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
Utility functions for normalizing and flattening nested lists of artifacts and paths.
"""

import types

def flatten(input) -> list:
	"""Return the input flattened to a list.

	input: any value composed of lists/generators/tuples, strings or other
	objects, nested arbitrarily. Dictionaries and targets are kept as single items.

	Empty strings and None items are removed.

	>>> flatten('lib/a.jar')
	['lib/a.jar']
	>>> flatten(['a.jar', ['b.jar', ['c.war'] ] ])
	['a.jar', 'b.jar', 'c.war']
	>>> flatten(['a.jar', ('b.jar', ('c.war') ), None, ''])
	['a.jar', 'b.jar', 'c.war']
	>>> flatten([{'ejb':'x.jar'}, 'y.jar'])
	[{'ejb': 'x.jar'}, 'y.jar']
	>>> flatten( x+'.jar' for x in ['a', 'b'])
	['a.jar', 'b.jar']
	>>> flatten(None)
	[]
	"""
	if input is None or (isinstance(input, str) and not input): return []
	if isinstance(input, (list, tuple, set, types.GeneratorType)):
		rv = []
		for l in input:
			rv.extend(flatten(l))
		return rv
	return [input]

def getStringList(stringOrListOfStrings) -> list:
	""" Return a list of strings, either identical to the input (if it's already a list), or with the input wrapped in
	a new list (if it's a string), or an empty list (if it's None).

	>>> getStringList('abc')
	['abc']
	>>> getStringList(('abc', 'def'))
	['abc', 'def']
	>>> getStringList(None)
	[]
	>>> getStringList(5)
	Traceback (most recent call last):
	...
	ValueError: The specified value must be a list of strings: "5"
	"""
	if stringOrListOfStrings is None:
		return []
	if isinstance(stringOrListOfStrings, (list, tuple)):
		return list(stringOrListOfStrings)
	if isinstance(stringOrListOfStrings, str):
		return [stringOrListOfStrings]
	raise ValueError('The specified value must be a list of strings: "%s"'%(stringOrListOfStrings))
