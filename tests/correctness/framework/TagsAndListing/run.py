from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack(stdouterr='jarpack-targets', args=['--targets'])
		self.jarpack(stdouterr='jarpack-properties', args=['--properties'])
		self.jarpack(stdouterr='jarpack-options', args=['--options'])
		self.jarpack(stdouterr='jarpack-dist', args=['dist', 'APP_VERSION=2.0'])
		self.msg = self.jarpack(stdouterr='jarpack-unknown', args=['no-such-tag'], shouldFail=True)

	def validate(self):
		self.assertGrep('jarpack-targets.out', expr='3 target[(]s[)] included')
		self.assertGrep('jarpack-targets.out', expr=r'<War> +\$\{OUTPUT_DIR\}/shop.war')
		self.assertGrep('jarpack-targets.out', expr=r'dist +\(1 targets\)')
		self.assertGrep('jarpack-targets.out', expr=r'web +\(2 targets\)')

		self.assertGrep('jarpack-properties.out', expr='APP_VERSION = 1.0')
		self.assertGrep('jarpack-options.out', expr='Ear.typePaths = {}')
		self.assertGrep('jarpack-options.out', expr='jar.manifest.createdBy = jarpack %s'%self.getJarpackVersion())

		# dependencies of the selected tag are built, others are not
		self.assertGrep('build-output/version.txt', expr='^2.0$')
		self.assertPathExists('build-output/shop.war')
		self.assertPathExists('build-output/tools.jar', exists=False)

		self.assertThat('msg.endswith(expected)', msg=self.msg, expected='Unknown target name or tag name: no-such-tag')
