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
Contains targets for packaging Java archives: `Jar`, `War` (web applications) and `Aar` (Axis2 web services).

Enterprise archives are created using `jarpack.targets.ear.Ear`.
"""

import os

from jarpack.pathsets import PathSet, AddDestPrefix, SingletonDestRenameMapper
from jarpack.propertysupport import defineOption
from jarpack.targets.archive import Zip
from jarpack.utils.manifest import Mapping
from jarpack.utils.classpath import CLASSPATH_HEADER

defineOption('jar.manifest.defaults', {})
defineOption('jar.manifest.classpathAppend', [])

class Jar(Zip):
	""" Create a ``.jar`` from a set of (already compiled) classes and other files, with a ``MANIFEST.MF``.

	The following options can be set when creating a Jar (or a `War` or `Aar`), using ``Jar(...).option(key, value)``
	or `jarpack.propertysupport.setGlobalOption()`:

		- ``jar.manifest.defaults = {}`` Default key/value pairs (e.g. version number) to include in the ``MANIFEST.MF``
		  of every jar whose manifest is specified as a dict.
		- ``jar.manifest.classpathAppend = []`` Add additional classpath entries to the ``MANIFEST.MF`` which are needed
		  at runtime but are not part of the ``classpath`` of this target.
		- ``jar.manifest.createdBy`` The ``Created-By`` header.

	For example::

		setGlobalOption('jar.manifest.defaults', {'Implementation-Version': '${APP_VERSION}', 'Implementation-Vendor': 'Acme'})

		Jar('${OUTPUT_DIR}/beans.jar', FindPaths('${CLASSES_DIR}/beans/'),
			manifest={'Implementation-Title':'Order beans'},
			classpath=['${OUTPUT_DIR}/util.jar']
		).setArtifactId('beans')
	"""

	artifactType = 'jar'

	def __init__(self, jar, package, manifest={}, metaInf=None, classpath=None):
		"""
		@param jar: path to the jar to create.

		@param package: PathSet (or list) of the files to include in the jar, typically the output of a compiler;
			destination mapping indicates where they will appear in the jar.

		@param manifest: Typically a dict of ``MANIFEST.MF`` entries (can be empty) such as::

				manifest={'Implementation-Title':'My Application'},

			See `jarpack.targets.archive.Zip` for the other ways of specifying the manifest, or use ``None``
			to produce a jar with no manifest.

		@param metaInf: additional files to include under ``META-INF/``.

		@param classpath: PathSet (or list) of libraries this jar needs at runtime. These are dependencies of the
			target but are not packaged inside it; instead their destinations are listed in the ``Class-Path`` header
			unless the manifest dict already contains one.
		"""
		self.classpath = PathSet(classpath)
		Zip.__init__(self, jar, package, manifest=manifest, metaInf=metaInf)
		self.registerImplicitInputOption(lambda optionKey: optionKey.startswith('jar.manifest.'))

	def _getDependencies(self):
		return Zip._getDependencies(self)+[self.classpath]

	def getManifestDefaults(self, context):
		return self.getOption('jar.manifest.defaults', errorIfNone=False) or {}

	def getManifestClasspath(self, context):
		""" Returns the list of ``/``-separated entries for the ``Class-Path`` header. """
		# we definitely do want to support use of ".." in destinations here, it can be very useful
		entries = [dest for (src, dest) in self.classpath.resolveWithDestinations(context)]
		classpathAppend = self.getOption('jar.manifest.classpathAppend', errorIfNone=False) or []
		assert isinstance(classpathAppend, list), classpathAppend # must not be a string
		entries.extend(classpathAppend)

		# need to always use / not \ for these to be valid
		return [p.replace(os.path.sep, '/').replace('\\', '/') for p in entries if p]

	def getManifestSpec(self, context):
		spec = Zip.getManifestSpec(self, context)
		if not isinstance(spec, Mapping): return spec
		if any(k.lower() == CLASSPATH_HEADER.lower() for k in spec.headers): return spec # hardcoded

		classpath = self.getManifestClasspath(context)
		if not classpath: return spec # suppress the header entirely if not needed

		headers = dict(spec.headers)
		headers[CLASSPATH_HEADER] = ' '.join(classpath)
		return Mapping(headers)

class War(Jar):
	""" Create a ``.war`` web application archive, with classes under ``WEB-INF/classes/`` and libraries
	under ``WEB-INF/lib/``.

	For example::

		War('${OUTPUT_DIR}/shop.war',
			package=FindPaths('src/main/webapp/'),
			classes=FindPaths('${CLASSES_DIR}/shop/'),
			libs=['${LIB_DIR}/commons-lang.jar'],
			manifest={'Implementation-Title':'Shop'},
		)
	"""

	artifactType = 'war'

	def __init__(self, war, package=None, classes=None, libs=None, manifest={}, metaInf=None, classpath=None):
		"""
		@param war: path to the war to create.

		@param package: PathSet (or list) of web content (JSPs, images, ``WEB-INF/web.xml`` etc) to include
			at the destinations given by the PathSet.

		@param classes: PathSet of the class files and resources to include under ``WEB-INF/classes/``.

		@param libs: PathSet (or list) of jars to include under ``WEB-INF/lib/``. When the war is part of an EAR,
			these libraries are already visible to it so are not added to its ``Class-Path``.

		@param manifest: the manifest, see `Jar`.

		@param metaInf: additional files to include under ``META-INF/``.

		@param classpath: PathSet (or list) of libraries to list in the ``Class-Path`` header, see `Jar`.
		"""
		self.classes = AddDestPrefix('WEB-INF/classes/', classes)
		self.libs = AddDestPrefix('WEB-INF/lib/', libs)
		Jar.__init__(self, war, [PathSet(package), self.classes, self.libs], manifest=manifest, metaInf=metaInf, classpath=classpath)

class Aar(Jar):
	""" Create an ``.aar`` Axis2 web service archive, with the WSDLs and ``services.xml`` under ``META-INF/``
	and libraries under ``lib/``.
	"""

	artifactType = 'aar'

	def __init__(self, aar, package=None, libs=None, wsdls=None, servicesXml=None, manifest={}, metaInf=None):
		"""
		@param aar: path to the aar to create.

		@param package: PathSet (or list) of the service classes and other files to include.

		@param libs: PathSet (or list) of jars to include under ``lib/``.

		@param wsdls: PathSet (or list) of WSDL files to include under ``META-INF/``.

		@param servicesXml: the path of the services descriptor, which is included as ``META-INF/services.xml``
			whatever its file name.

		@param manifest: the manifest, see `Jar`.

		@param metaInf: additional files to include under ``META-INF/``.
		"""
		self.libs = AddDestPrefix('lib/', libs)
		self.wsdls = AddDestPrefix('META-INF/', wsdls)
		self.servicesXml = SingletonDestRenameMapper('META-INF/services.xml', servicesXml) if servicesXml else None
		Jar.__init__(self, aar, [PathSet(package), self.libs, self.wsdls, self.servicesXml], manifest=manifest, metaInf=metaInf)
