# jarpack - Java archive packaging for Python-based builds
#
# Copyright (c) 2013 - 2019 Software AG, Darmstadt, Germany and/or its licensors
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
File system helpers used by targets: directory creation and deletion, path normalization
and writing files via a temporary file that atomically replaces the destination.
"""

import shutil, os, os.path, stat, errno, tempfile, sys
import contextlib

import logging
log = logging.getLogger('jarpack.fileutils')

openForWrite = open
"""
Open file for writing and return a corresponding text or binary stream file object.

Targets should use this (rather than open) for files they write, so that write
behaviour can be customized in one place.
"""

def isDirPath(path):
	""" Returns true if the path is a directory (ends with a slash, ``/`` or ``\\\\``).

	>>> isDirPath('WEB-INF/lib/')
	True
	>>> isDirPath('WEB-INF/lib/a.jar')
	False
	>>> isDirPath('')
	False
	"""
	return bool(path) and path[-1] in ('/', '\\')

def normPath(path):
	""" Normalizes the specified path, preserving any trailing slash that indicates a directory.

	>>> normPath('a/b/../c/').replace(os.sep, '/')
	'a/c/'
	>>> normPath('a//b').replace(os.sep, '/')
	'a/b'
	"""
	isdir = isDirPath(path)
	path = os.path.normpath(path)
	if isdir: path += os.sep
	return path

def normLongPath(path):
	""" Returns an absolute, normalized version of the path, preserving any trailing directory separator. """
	if not path: return path
	return normPath(os.path.abspath(path) + (os.sep if isDirPath(path) else ''))

def mkdir(newdir):
	""" Recursively create the specified directory if it doesn't already exist.

	If it does, exit without error.

	@param newdir: The path to create.
	@return: newdir, to allow fluent use of this method.
	"""
	origdir = newdir
	newdir = normLongPath(newdir)
	if os.path.isdir(newdir):
		return origdir

	if os.path.isfile(newdir):
		raise IOError("A file with the same name as the desired dir, '%s', already exists" % newdir)

	try:
		os.makedirs(newdir)
	except Exception as e:
		if not os.path.isdir(newdir):
			raise IOError('Problem creating directory %s: %s' % (newdir, e))
	return origdir

def deleteDir(path):
	""" Recursively delete a directory and its contents, if it exists.

	Read-only files are made writable before retrying their deletion.
	"""
	def handleRemoveReadonly(func, p, exc):
		excvalue = exc if isinstance(exc, BaseException) else exc[1]
		if func in (os.rmdir, os.remove, os.unlink) and excvalue.errno == errno.EACCES:
			log.info("handleRemoveReadonly: making %s writable and retrying", p)
			os.chmod(p, stat.S_IRWXU| stat.S_IRWXG| stat.S_IRWXO)
			func(p)
			return
		raise excvalue

	path = normLongPath(path)
	if not os.path.exists(path):
		return
	if os.path.isfile(path):
		raise OSError("Unable to delete dir %s as this is a file not a directory" % (path))
	if sys.version_info >= (3, 12):
		shutil.rmtree(path, onexc=handleRemoveReadonly)
	else:
		shutil.rmtree(path, onerror=handleRemoveReadonly)

def deleteFile(path):
	""" Delete the specified file if it exists. """
	path = normLongPath(path)
	try:
		os.remove(path)
	except OSError as e:
		if e.errno != errno.ENOENT: raise

def getmtime(path):
	""" Return the modification time of the path, or 0 if it does not exist. """
	try:
		return os.stat(normLongPath(path)).st_mtime
	except OSError:
		return 0

@contextlib.contextmanager
def openForAtomicReplace(path, mode='wb'):
	""" Context manager that opens a temporary file in the same directory as path, and (only if the
	block completes without an exception) atomically moves it over path.

	If the block fails the temporary file is removed and the original path is left untouched.

	>>> import tempfile
	>>> d = tempfile.mkdtemp()
	>>> with openForAtomicReplace(d+'/x.txt', 'w') as f: _ = f.write('first')
	>>> try:
	...   with openForAtomicReplace(d+'/x.txt', 'w') as f:
	...     _ = f.write('second')
	...     raise IOError('interrupted')
	... except IOError as e: print(e)
	interrupted
	>>> open(d+'/x.txt').read()
	'first'
	>>> sorted(os.listdir(d))
	['x.txt']
	"""
	path = normLongPath(path)
	fd, tmp = tempfile.mkstemp(prefix=os.path.basename(path)+'.', suffix='.tmp', dir=os.path.dirname(path))
	try:
		with os.fdopen(fd, mode) as f:
			yield f
		if os.path.exists(path):
			shutil.copymode(path, tmp)
		os.replace(tmp, path)
	except BaseException:
		deleteFile(tmp)
		raise
