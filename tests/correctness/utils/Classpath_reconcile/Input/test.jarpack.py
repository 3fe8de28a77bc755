import os, json, zipfile

from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.basetarget import BaseTarget
from jarpack.utils.fileutils import mkdir
from jarpack.utils.ziputils import readEntry, listEntries
from jarpack.utils.classpath import reconcileClasspath

defineOutputDirProperty('OUTPUT_DIR', None)

class ReconcileTest(BaseTarget):
	""" Exercises reconcileClasspath on some hand-crafted archives, writing the results to results.json. """
	def __init__(self, name):
		BaseTarget.__init__(self, name, [])

	def makeArchive(self, name, manifest, entries):
		path = os.path.join(self.path, name)
		with zipfile.ZipFile(path, 'w') as zf:
			if manifest is not None: zf.writestr('META-INF/MANIFEST.MF', manifest)
			for e in entries: zf.writestr(e, 'contents of '+e)
		return path

	def reconcile(self, results, key, path, libs, **kwargs):
		appended = reconcileClasspath(path, libs, **kwargs)
		manifest = readEntry(path, 'META-INF/MANIFEST.MF')
		results[key] = {'appended':appended, 'entries':listEntries(path), 'manifest':manifest.decode('utf-8')}

	def run(self, context):
		mkdir(self.path)
		results = {}

		war = self.makeArchive('web.war', 'Manifest-Version: 1.0\nClass-Path: a.jar\n', ['index.html', 'WEB-INF/lib/c.jar'])
		self.reconcile(results, 'war', war, ['lib/a.jar', 'lib/b.jar', 'lib/c.jar', 'other/b.jar'])
		with open(war, 'rb') as f: before = f.read()
		self.reconcile(results, 'war-again', war, ['lib/a.jar', 'lib/b.jar', 'lib/c.jar', 'other/b.jar'])
		with open(war, 'rb') as f: results['war-again']['unchanged'] = (before == f.read())

		self.reconcile(results, 'crlf', self.makeArchive('crlf.jar',
			'Manifest-Version: 1.0\r\nMain-Class: A\r\n\r\nName: com/acme/\r\nSealed: true\r\n', ['A.class']),
			['lib/a.jar', 'lib/b.jar'])

		self.reconcile(results, 'no-manifest', self.makeArchive('nomanifest.jar', None, ['A.class']),
			['lib/a.jar'], createdBy='jarpack-test')

		self.reconcile(results, 'long', self.makeArchive('long.jar', 'Manifest-Version: 1.0\n', []),
			['lib/'+'x'*80+'.jar', 'lib/short.jar'])

		self.reconcile(results, 'aar', self.makeArchive('service.aar', 'Manifest-Version: 1.0\n', ['lib/axiom.jar']),
			['lib/axiom.jar', 'lib/spring.jar'], embeddedLibDir='lib/')

		self.reconcile(results, 'unterminated', self.makeArchive('unterminated.jar', 'Manifest-Version: 1.0\nMain-Class: A', ['A.class']),
			['lib/b.jar'])

		self.reconcile(results, 'mixed-sections', self.makeArchive('mixed.jar',
			'Manifest-Version: 1.0\n\nName: com/acme/\rSealed: true\r\n\r\nName: com/acme/util/\nSealed: false\n', ['A.class']),
			['lib/a.jar'])

		with open(os.path.join(self.path, 'results.json'), 'w') as f:
			json.dump(results, f, indent=2, sort_keys=True)

ReconcileTest('${OUTPUT_DIR}/reconcile/')
