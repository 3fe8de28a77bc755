from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.msg = self.jarpack(shouldFail=True, args=['--keep-going'])

	def validate(self):
		self.assertThat('"Duplicate archive entry \\"readme.txt\\"" in msg', msg=self.msg)
		self.assertThat('"duplicate.zip" in msg', msg=self.msg)

		# failed target is not left behind, other targets still built with --keep-going
		self.assertThat('entries == expected', entries=self.listArchive('build-output/ok.zip'), expected=['readme.txt', 'b/readme.txt'])
		self.assertGrep('jarpack.out', expr=r'\*\*\* JARPACK FAILED: 1 error')
