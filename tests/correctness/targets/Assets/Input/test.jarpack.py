import os
from jarpack.propertysupport import *
from jarpack.buildcommon import *
from jarpack.pathsets import *

from jarpack.targets.assets import *
from jarpack.targets.java import *

defineOutputDirProperty('OUTPUT_DIR', None)

# the sources are created by the test
assets = Assets('${OUTPUT_DIR}/webapp/', [
	os.environ['ASSETS_SRC']+'/main/',
	os.environ['ASSETS_SRC']+'/generated/',
	])

War('${OUTPUT_DIR}/shop.war', package=FindPaths(assets))
