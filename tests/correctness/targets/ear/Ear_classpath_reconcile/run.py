from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack(stdouterr='jarpack-1')
		for a in ['shop.war', 'admin.war', 'beans.jar']:
			self.extractArchiveEntry('build-output/'+a, 'META-INF/MANIFEST.MF', dest='1-%s.MF'%a)

		self.jarpack(stdouterr='jarpack-2-noop')
		for a in ['shop.war', 'admin.war', 'beans.jar']:
			self.extractArchiveEntry('build-output/'+a, 'META-INF/MANIFEST.MF', dest='2-%s.MF'%a)

		self.jarpack(stdouterr='jarpack-3-extra-lib', args=['EXTRA_LIB=true'])
		for a in ['shop.war', 'admin.war', 'beans.jar']:
			self.extractArchiveEntry('build-output/'+a, 'META-INF/MANIFEST.MF', dest='3-%s.MF'%a)

	def getClasspath(self, manifest):
		with open(self.output+'/'+manifest, 'rb') as f:
			lines = f.read().decode('utf-8').split('\n')
		start = [i for i, l in enumerate(lines) if l.startswith('Class-Path:')]
		if not start: return None
		end = start[0]+1
		while lines[end].startswith(' '): end += 1
		return lines[start[0]:end]

	def validate(self):
		self.assertThat('shop == expected', shop=self.getClasspath('1-shop.war.MF'), expected=['Class-Path: a.jar', '  lib/b.jar'])
		self.assertThat('admin == expected', admin=self.getClasspath('1-admin.war.MF'), expected=['Class-Path: lib/a.jar'])
		self.assertThat('beans == expected', beans=self.getClasspath('1-beans.jar.MF'), expected=['Class-Path: lib/a.jar', '  lib/b.jar'])
		self.assertGrep('jarpack-1.log', expr='Added to Class-Path of .*shop.war: lib/b.jar$')

		# nothing is rebuilt or rewritten the second time
		self.assertGrep('jarpack-2-noop.log', expr='Target is already up-to-date: .*app.ear')
		self.assertGrep('jarpack-2-noop.log', expr='Added to Class-Path', contains=False)
		for a in ['shop.war', 'admin.war', 'beans.jar']:
			self.assertThat('noopManifest == firstManifest', noopManifest=self.getClasspath('2-%s.MF'%a), firstManifest=self.getClasspath('1-%s.MF'%a))

		# adding a shared library rebuilds the components
		self.assertGrep('jarpack-3-extra-lib.log', expr='shop.war must be rebuilt because implicit inputs file has changed')
		self.assertThat('shop == expected', shop=self.getClasspath('3-shop.war.MF'), expected=['Class-Path: a.jar', '  lib/b.jar', '  lib/c.jar'])
		self.assertThat('admin == expected', admin=self.getClasspath('3-admin.war.MF'), expected=['Class-Path: lib/a.jar', '  lib/c.jar'])
		self.assertThat('beans == expected', beans=self.getClasspath('3-beans.jar.MF'), expected=['Class-Path: lib/a.jar', '  lib/b.jar', '  lib/c.jar'])
		self.assertThat('entries == expected', entries=self.listArchive('build-output/app.ear'), expected=[
			'META-INF/MANIFEST.MF',
			'lib/a.jar',
			'lib/b.jar',
			'lib/c.jar',
			'war/shop.war',
			'war/admin.war',
			'ejb/beans.jar',
			'META-INF/application.xml',
			])
