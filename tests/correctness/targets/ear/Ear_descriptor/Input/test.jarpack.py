from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.ear import *
from jarpack.targets.writefile import *

defineOutputDirProperty('OUTPUT_DIR', None)
defineStringProperty('APP_NAME', 'Shop')

WriteFile('${OUTPUT_DIR}/classes/Shop.class', b'\xca\xfe\xba\xbe')
WriteFile('${OUTPUT_DIR}/lib/util.jar', b'not a real jar')

web = War('${OUTPUT_DIR}/shop.war', classes=['${OUTPUT_DIR}/classes/Shop.class'])
admin = War('${OUTPUT_DIR}/admin-1.0.war', classes=['${OUTPUT_DIR}/classes/Shop.class']).setArtifactId('admin')
beans = Jar('${OUTPUT_DIR}/beans.jar', ['${OUTPUT_DIR}/classes/Shop.class'])
client = Jar('${OUTPUT_DIR}/client.jar', ['${OUTPUT_DIR}/classes/Shop.class'], manifest={'Main-Class':'Shop'})

ear = Ear('${OUTPUT_DIR}/shop.ear', displayName='${APP_NAME} application')
ear.push('${OUTPUT_DIR}/lib/util.jar')
ear.add(web, contextRoot='/store')
ear.add(admin, path='admin')
ear << {'ejb': beans}
ear.add(client, type='jar')
ear.add(rar='connectors/mq.rar', id='mq')
ear.setPath('lib', 'APP-INF/lib').setPath('war', '')
ear.option('Ear.typePaths', {'ejb':'ejbs', 'lib':'not-used'})

# no display name, and no context root
ear2 = Ear('${OUTPUT_DIR}/minimal.ear', manifest=None)
ear2.add(web, contextRoot=False)
