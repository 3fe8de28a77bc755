from jarpack.propertysupport import *
from jarpack.pathsets import *

from jarpack.targets.java import *
from jarpack.targets.ear import *

defineOutputDirProperty('OUTPUT_DIR', None)

service = Aar('${OUTPUT_DIR}/service.aar', [])

ear = Ear('${OUTPUT_DIR}/app.ear')
ear.push('lib/util.jar')
ear.add(service)
