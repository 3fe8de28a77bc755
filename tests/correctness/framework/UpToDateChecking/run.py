from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.mkdir('src/classes/com/acme')
		self.write_text('src/classes/com/acme/A.class', 'a')
		self.write_text('src/classes/com/acme/B.class', 'b')
		src = 'SRC_DIR=%s/src'%self.output

		self.jarpack(args=[src], stdouterr='1-orig')
		self.jarpack(args=[src], stdouterr='2-noop')
		self.jarpack(args=[src, 'TITLE=new title'], stdouterr='3-manifest-changed')

		self.wait(1.0)
		self.write_text('src/classes/com/acme/B.class', 'bbb')
		self.jarpack(args=[src, 'TITLE=new title'], stdouterr='4-input-changed')

	def validate(self):
		self.assertGrep('2-noop.log', expr='Target is already up-to-date: .*test.jar')
		self.assertGrep('2-noop.log', expr='Target is already up-to-date: .*test.ear')
		self.assertGrep('2-noop.out', expr=r'\*\*\* JARPACK SUCCEEDED: <NO TARGETS> built \(2 up-to-date\)')

		self.assertGrep('3-manifest-changed.log', expr='Up-to-date check: .*test.jar must be rebuilt because implicit inputs file has changed')
		self.assertGrep('3-manifest-changed.log', expr=r'\+ manifest: Implementation-Title: new title')
		self.assertGrep('3-manifest-changed.log', expr='Up-to-date check: .*test.ear must be rebuilt due to change in dependency .*test.jar')

		self.assertGrep('4-input-changed.log', expr='Up-to-date check: .*test.jar must be rebuilt because input file ".*B.class" is newer than ".+"')
