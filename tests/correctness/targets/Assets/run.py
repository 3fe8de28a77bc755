from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		env = {'ASSETS_SRC': self.output+'/src'}
		self.mkdir('src/main/images')
		self.mkdir('src/generated')
		self.write_text('src/main/index.html', '<html/>')
		self.write_text('src/main/images/logo.gif', 'GIF89a')
		self.write_text('src/main/style.css', 'old')
		self.wait(1.0)
		# newer than the one in main/
		self.write_text('src/generated/style.css', 'generated')

		self.jarpack(stdouterr='jarpack-1', env=env)
		self.jarpack(stdouterr='jarpack-2-noop', env=env)

		self.wait(1.0)
		self.write_text('src/main/index.html', '<html>changed</html>')
		self.jarpack(stdouterr='jarpack-3-changed', env=env)

	def validate(self):
		self.assertThat('files == expected', files=sorted(
				os.path.relpath(os.path.join(root, f), self.output+'/build-output/webapp').replace(os.sep, '/')
				for root, dirs, files in os.walk(self.output+'/build-output/webapp') for f in files),
			expected=['images/logo.gif', 'index.html', 'style.css'])
		self.assertGrep('build-output/webapp/style.css', expr='^generated$')
		self.assertGrep('build-output/webapp/index.html', expr='changed')

		self.assertGrep('jarpack-2-noop.log', expr='Target is already up-to-date: .*webapp')
		self.assertGrep('jarpack-3-changed.log', expr='webapp/ must be rebuilt because input file ".*index.html" is newer')
		self.assertThat('entries == expected', entries=self.listArchive('build-output/shop.war'), expected=[
			'META-INF/MANIFEST.MF', 'index.html', 'style.css', 'images/logo.gif'])
