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
Contains the `Zip` target, which is also the base class of the Java archive targets.
"""

import zipfile

from jarpack.buildcommon import JARPACK_VERSION
from jarpack.pathsets import PathSet, AddDestPrefix
from jarpack.basetarget import BaseTarget
from jarpack.propertysupport import defineOption
from jarpack.utils.manifest import MANIFEST_PATH, ManifestSpec, ManifestBuilder, ManifestFile, Deferred
from jarpack.utils.ziputils import ArchiveWriter

defineOption('Zip.compression', zipfile.ZIP_DEFLATED)
defineOption('jar.manifest.createdBy', 'jarpack %s'%JARPACK_VERSION)

class Zip(BaseTarget):
	""" Target that creates a zip archive from a set of input files, optionally with a ``META-INF/MANIFEST.MF``.

	The following options can be set using ``Zip(...).option(key, value)`` or `jarpack.propertysupport.setGlobalOption()`:

		- ``Zip.compression = zipfile.ZIP_DEFLATED`` The compression used for file entries (directory entries are
		  always stored uncompressed).
		- ``jar.manifest.createdBy = "jarpack <version>"`` The value of the manifest's ``Created-By`` header.
	"""

	def __init__(self, archive, inputs, manifest=None, metaInf=None):
		"""
		@param archive: the archive to be created, e.g. ``${OUTPUT_DIR}/dist.zip``.

		@param inputs: the files (usually pathsets) to be included in the archive; destination mapping
			indicates the entry name of each file.

		@param manifest: None (or False) for a plain zip with no manifest, otherwise the manifest to write as the
			first entry of the archive, which can be a dict of headers, a list of dicts (one per section),
			a string of manifest text, a `jarpack.utils.manifest.ManifestFile`, a function returning any of these,
			or any other `jarpack.utils.manifest.ManifestSpec`.

		@param metaInf: additional files (usually pathsets) to be included under ``META-INF/``.
		"""
		self.inputs = PathSet(inputs)
		self.metaInf = AddDestPrefix('META-INF/', metaInf) if metaInf else None
		self.manifest = None if (manifest is None or manifest is False) else ManifestSpec.create(manifest)

		# a manifest file may be relative to the build file, or generated by another target
		self.__manifestFile = PathSet(self.manifest.path) if isinstance(self.manifest, ManifestFile) else None

		BaseTarget.__init__(self, archive, self._getDependencies())

		self.registerImplicitInputOption('Zip.compression')
		# include source representation of inputs, so that changes to the list get reflected
		self.registerImplicitInput(lambda context: 'src: '+context.expandPropertyValues('%s'%self.inputs))
		if self.metaInf: self.registerImplicitInput(lambda context: 'metaInf: '+context.expandPropertyValues('%s'%self.metaInf))
		if self.manifest is not None:
			self.registerImplicitInputOption('jar.manifest.createdBy')
			self.registerImplicitInput(self.__getManifestImplicitInputs)

	def _getDependencies(self):
		""" Returns the list of dependencies of this target. Subclasses may extend this. """
		return [self.inputs, self.metaInf, self.__manifestFile]

	def __getManifestImplicitInputs(self, context):
		spec = self.getManifestSpec(context)
		if isinstance(spec, (Deferred, ManifestFile)):
			# not safe to evaluate these until the target is actually being built
			return ['manifest: %r'%spec]
		return ['manifest: %s'%l for l in self.getManifestBuilder(context).render(spec)]

	def getManifestSpec(self, context):
		""" Returns the `jarpack.utils.manifest.ManifestSpec` for this archive, or None if there is no manifest.

		Subclasses may override this to add headers.
		"""
		if self.__manifestFile:
			return ManifestFile(self.__manifestFile.resolve(context)[0])
		return self.manifest

	def getManifestDefaults(self, context):
		""" Returns a dict of default manifest headers added to any manifest specified as a dict. """
		return {}

	def getManifestBuilder(self, context):
		return ManifestBuilder(self.getOption('jar.manifest.createdBy'),
			defaults=self.getManifestDefaults(context),
			expandValue=context.expandPropertyValues)

	def getArchiveContents(self, context):
		""" Returns a list of (srcAbsPath, entryName) tuples for all the files to be packaged. """
		contents = list(self.inputs.resolveWithDestinations(context))
		if self.metaInf: contents.extend(self.metaInf.resolveWithDestinations(context))
		return contents

	def writeAdditionalEntries(self, archive, context):
		""" Called after all the input files have been added, for subclasses that generate additional entries.

		@param archive: the `jarpack.utils.ziputils.ArchiveWriter`.
		"""
		pass

	def run(self, context):
		spec = self.getManifestSpec(context)
		with ArchiveWriter(self.path, compression=self.getOption('Zip.compression')) as archive:
			if spec is not None:
				manifest = self.getManifestBuilder(context).getBytes(spec)
				self.log.debug('Writing manifest for %s:\n%s', self, manifest.decode('utf-8'))
				archive.writeBytes(MANIFEST_PATH, manifest)
			for (src, dest) in self.getArchiveContents(context):
				archive.include(dest, src)
			self.writeAdditionalEntries(archive, context)
