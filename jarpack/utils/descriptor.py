# jarpack - Java archive packaging for Python-based builds
#
# Copyright (c) 2026 The jarpack authors
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#

"""
Generates the ``META-INF/application.xml`` deployment descriptor of an EAR.
"""

import xml.etree.ElementTree as ET
from xml.dom import minidom

from jarpack.utils.buildexceptions import MissingDisplayName

DESCRIPTOR_PATH = 'META-INF/application.xml'

J2EE_PUBLIC_ID = '-//Sun Microsystems, Inc.//DTD J2EE Application 1.2//EN'
J2EE_SYSTEM_ID = 'http://java.sun.com/j2ee/dtds/application_1_2.dtd'

def getContextRoot(component):
	""" Returns the web context root for a war component, or None if it should be omitted.

	>>> from types import SimpleNamespace as C
	>>> getContextRoot(C(id='shop', contextRoot=None))
	'/shop'
	>>> getContextRoot(C(id='shop', contextRoot='store'))
	'/store'
	>>> getContextRoot(C(id='shop', contextRoot='/'))
	'/'
	>>> getContextRoot(C(id='shop', contextRoot=False)) is None
	True
	"""
	if component.contextRoot is False: return None
	root = component.contextRoot or component.id
	if not root.startswith('/'): root = '/'+root
	return root

def generateDescriptor(components, displayName=None, requireDisplayName=False):
	""" Returns the text of the ``application.xml`` descriptor for the specified EAR components.

	Each component must have ``type``, ``id``, ``uri`` and ``contextRoot`` attributes. Libraries
	(type ``lib``) are on the classpath only so have no entry in the descriptor.

	>>> from types import SimpleNamespace as C
	>>> print(generateDescriptor([
	...    C(type='war', id='web', uri='war/web.war', contextRoot=None),
	...    C(type='ejb', id='beans', uri='ejb/beans.jar', contextRoot=None),
	...    C(type='lib', id='util', uri='lib/util.jar', contextRoot=None),
	...    C(type='jar', id='client', uri='jar/client.jar', contextRoot=None),
	...    C(type='rar', id='conn', uri='rar/conn.rar', contextRoot=None),
	...    ], displayName='Shop & Co'), end='')
	<?xml version="1.0" encoding="UTF-8"?>
	<!DOCTYPE application PUBLIC "-//Sun Microsystems, Inc.//DTD J2EE Application 1.2//EN" "http://java.sun.com/j2ee/dtds/application_1_2.dtd">
	<application>
	  <display-name>Shop &amp; Co</display-name>
	  <module id="web">
	    <web>
	      <web-uri>war/web.war</web-uri>
	      <context-root>/web</context-root>
	    </web>
	  </module>
	  <module id="beans">
	    <ejb>ejb/beans.jar</ejb>
	  </module>
	  <jar>jar/client.jar</jar>
	  <module id="conn">
	    <connector>rar/conn.rar</connector>
	  </module>
	</application>

	>>> print(generateDescriptor([C(type='war', id='web', uri='web.war', contextRoot=False)]), end='')
	<?xml version="1.0" encoding="UTF-8"?>
	<!DOCTYPE application PUBLIC "-//Sun Microsystems, Inc.//DTD J2EE Application 1.2//EN" "http://java.sun.com/j2ee/dtds/application_1_2.dtd">
	<application>
	  <display-name/>
	  <module id="web">
	    <web>
	      <web-uri>web.war</web-uri>
	    </web>
	  </module>
	</application>

	>>> generateDescriptor([], requireDisplayName=True)
	Traceback (most recent call last):
	...
	jarpack.utils.buildexceptions.MissingDisplayName: A display name is required for the application descriptor

	@param components: the ordered list of components.

	@param displayName: the application's display name; if not specified an empty ``display-name`` element is written.

	@param requireDisplayName: if True, raise `MissingDisplayName` instead of writing an empty display name.
	"""
	if not displayName and requireDisplayName:
		raise MissingDisplayName('A display name is required for the application descriptor')

	application = ET.Element('application')
	ET.SubElement(application, 'display-name').text = displayName or None
	for c in components:
		if c.type == 'war':
			web = ET.SubElement(ET.SubElement(application, 'module', id=c.id), 'web')
			ET.SubElement(web, 'web-uri').text = c.uri
			contextRoot = getContextRoot(c)
			if contextRoot is not None:
				ET.SubElement(web, 'context-root').text = contextRoot
		elif c.type == 'ejb':
			ET.SubElement(ET.SubElement(application, 'module', id=c.id), 'ejb').text = c.uri
		elif c.type == 'jar':
			ET.SubElement(application, 'jar').text = c.uri
		elif c.type == 'rar':
			ET.SubElement(ET.SubElement(application, 'module', id=c.id), 'connector').text = c.uri

	dom = minidom.parseString(ET.tostring(application, encoding='unicode'))
	return '\n'.join([
		'<?xml version="1.0" encoding="UTF-8"?>',
		'<!DOCTYPE application PUBLIC "%s" "%s">'%(J2EE_PUBLIC_ID, J2EE_SYSTEM_ID),
		dom.documentElement.toprettyxml(indent='  ')])
