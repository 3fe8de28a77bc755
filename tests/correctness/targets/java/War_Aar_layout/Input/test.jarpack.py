from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.writefile import *

defineOutputDirProperty('OUTPUT_DIR', None)

WriteFile('${OUTPUT_DIR}/classes/com/acme/Shop.class', b'\xca\xfe\xba\xbe')
WriteFile('${OUTPUT_DIR}/classes/shop.properties', 'title=Shop')
WriteFile('${OUTPUT_DIR}/lib/commons-lang.jar', b'PK')
WriteFile('${OUTPUT_DIR}/lib/axiom.jar', b'PK')

War('${OUTPUT_DIR}/shop.war',
	package=FindPaths('webapp/'),
	classes=[
		AddDestPrefix('com/acme/', '${OUTPUT_DIR}/classes/com/acme/Shop.class'),
		'${OUTPUT_DIR}/classes/shop.properties',
	],
	libs=['${OUTPUT_DIR}/lib/commons-lang.jar'],
	manifest={'Implementation-Title':'Shop'},
)

Aar('${OUTPUT_DIR}/orders.aar',
	package=AddDestPrefix('com/acme/', '${OUTPUT_DIR}/classes/com/acme/Shop.class'),
	libs=['${OUTPUT_DIR}/lib/axiom.jar'],
	wsdls=FindPaths('wsdl/'),
	servicesXml='axis2-services.xml',
).setArtifactId('orders-service')
