from pysys.constants import *
from jarpacktest.jarpack_basetest import JarpackBaseTest

class PySysTest(JarpackBaseTest):

	def execute(self):
		self.jarpack()
		for jar in ['test.jar', 'explicit-classpath.jar', 'no-defaults.jar']:
			self.extractArchiveEntry('build-output/'+jar, 'META-INF/MANIFEST.MF', dest=jar+'.MF')

	def validate(self):
		self.assertThat('entries == expected', entries=self.listArchive('build-output/test.jar'),
			expected=['META-INF/MANIFEST.MF', 'com/acme/Main.class'])

		self.logFileContents('test.jar.MF', maxLines=0)
		with open(self.output+'/test.jar.MF', 'rb') as f:
			lines = f.read().decode('utf-8').split('\n')
		self.assertThat('lastLine == ""', lastLine=lines[-1]) # ends with a newline
		lines = lines[:-1]
		self.assertThat('firstLines == expected', firstLines=lines[:2], expected=['Manifest-Version: 1.0', 'Created-By: jarpack %s'%self.getJarpackVersion()])
		self.assertThat('maxLineLength < 72', maxLineLength=max(len(l) for l in lines))

		# sorted, with defaults merged and property values expanded and stripped
		self.assertThat('headers == expected', headers=[l.split(':')[0] for l in lines if not l.startswith(' ')], expected=[
			'Manifest-Version', 'Created-By', 'Class-Path', 'Implementation-Title', 'Implementation-Vendor', 'Long-Header', 'Main-Class'])
		self.assertGrep('test.jar.MF', expr='^Class-Path: lib/util.jar ext/extra.jar$')
		self.assertGrep('test.jar.MF', expr='^Implementation-Title: My title$')
		self.assertGrep('test.jar.MF', expr='^Implementation-Vendor: Acme$')
		self.assertGrep('test.jar.MF', expr='^Main-Class: com.acme.Main$')

		longHeader = [l for l in lines if l.startswith('Long-Header') or l.startswith(' ')]
		self.assertThat('longHeaderLines == expected', longHeaderLines=[len(l) for l in longHeader], expected=[71, 71, 23])
		self.assertThat('unwrapped == expected', unwrapped=longHeader[0]+''.join(l[1:] for l in longHeader[1:]), expected='Long-Header: '+'x'*150)

		self.assertGrep('explicit-classpath.jar.MF', expr='^Class-Path: other.jar$')
		self.assertGrep('explicit-classpath.jar.MF', expr='util.jar', contains=False)
		self.assertGrep('explicit-classpath.jar.MF', expr='^Implementation-Vendor: Acme$')

		self.assertGrep('no-defaults.jar.MF', expr='^Main-Class: com.acme.Main$')
		self.assertGrep('no-defaults.jar.MF', expr='Implementation-Vendor', contains=False)
		self.assertGrep('no-defaults.jar.MF', expr='Class-Path', contains=False)
