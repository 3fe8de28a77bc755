from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack()
		self.extractArchiveEntry('build-output/shop.ear', 'META-INF/application.xml', dest='application.xml')
		self.extractArchiveEntry('build-output/minimal.ear', 'META-INF/application.xml', dest='minimal-application.xml')

	def validate(self):
		self.assertThat('entries == expected', entries=self.listArchive('build-output/shop.ear'), expected=[
			'META-INF/MANIFEST.MF',
			'APP-INF/lib/util.jar',
			'shop.war',
			'admin/admin-1.0.war',
			'ejbs/beans.jar',
			'jar/client.jar',
			'rar/mq.rar',
			'META-INF/application.xml',
			])
		self.assertDiff('application.xml', 'application.xml')

		self.assertThat('entries == expected', entries=self.listArchive('build-output/minimal.ear'), expected=[
			'war/shop.war',
			'META-INF/application.xml',
			])
		self.assertDiff('minimal-application.xml', 'minimal-application.xml')
