from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack()
		self.extractArchiveEntry('build-output/orders.aar', 'META-INF/services.xml', dest='services.xml')

	def validate(self):
		self.assertThat('entries == expected', entries=self.listArchive('build-output/shop.war'), expected=[
			'META-INF/MANIFEST.MF',
			'index.html',
			'WEB-INF/web.xml',
			'images/logo.gif',
			'WEB-INF/classes/com/acme/Shop.class',
			'WEB-INF/classes/shop.properties',
			'WEB-INF/lib/commons-lang.jar',
			])

		self.assertThat('entries == expected', entries=self.listArchive('build-output/orders.aar'), expected=[
			'META-INF/MANIFEST.MF',
			'com/acme/Shop.class',
			'lib/axiom.jar',
			'META-INF/Orders.wsdl',
			'META-INF/services.xml',
			])
		self.assertGrep('services.xml', expr='<serviceGroup/>')
