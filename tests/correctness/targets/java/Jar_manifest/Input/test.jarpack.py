from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.writefile import *

defineOutputDirProperty('OUTPUT_DIR', None)
defineStringProperty('TITLE', 'title')

setGlobalOption('jar.manifest.defaults', {'Implementation-Vendor':'Acme', 'Implementation-Title':'default title'})

WriteFile('${OUTPUT_DIR}/classes/com/acme/Main.class', b'\xca\xfe\xba\xbe')
WriteFile('${OUTPUT_DIR}/lib/util.jar', b'not a real jar, only listed on the Class-Path')

Jar('${OUTPUT_DIR}/test.jar',
	AddDestPrefix('com/acme/', '${OUTPUT_DIR}/classes/com/acme/Main.class'),
	manifest={
		'Implementation-Title':'My ${TITLE} ',
		' Main-Class ':' com.acme.Main ',
		'Long-Header':'x'*150,
	},
	classpath=AddDestPrefix('lib/', '${OUTPUT_DIR}/lib/util.jar'),
).option('jar.manifest.classpathAppend', ['ext/extra.jar'])

# an explicit Class-Path wins over the classpath
Jar('${OUTPUT_DIR}/explicit-classpath.jar', [],
	manifest={'Class-Path':'other.jar'},
	classpath=['${OUTPUT_DIR}/lib/util.jar'],
)

# defaults only apply to dict manifests
Jar('${OUTPUT_DIR}/no-defaults.jar', [], manifest='Main-Class: com.acme.Main')
