from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.ear import *
from jarpack.targets.writefile import *

defineOutputDirProperty('OUTPUT_DIR', None)
defineBooleanProperty('EXTRA_LIB', False)

for lib in ['a', 'b', 'c']:
	WriteFile('${OUTPUT_DIR}/libs/%s.jar'%lib, b'not a real jar')
WriteFile('${OUTPUT_DIR}/classes/Shop.class', b'\xca\xfe\xba\xbe')

# already references a.jar
shop = War('${OUTPUT_DIR}/shop.war', classes=['${OUTPUT_DIR}/classes/Shop.class'], manifest={'Class-Path':'a.jar'})
# already contains b.jar
admin = War('${OUTPUT_DIR}/admin.war', classes=['${OUTPUT_DIR}/classes/Shop.class'], libs=['${OUTPUT_DIR}/libs/b.jar'])
beans = Jar('${OUTPUT_DIR}/beans.jar', ['${OUTPUT_DIR}/classes/Shop.class'])

ear = Ear('${OUTPUT_DIR}/app.ear', displayName='App')
ear.push('${OUTPUT_DIR}/libs/a.jar', '${OUTPUT_DIR}/libs/b.jar')
if getPropertyValue('EXTRA_LIB'):
	ear.push('${OUTPUT_DIR}/libs/c.jar')
ear.push(shop, admin, {'ejb':beans})
