import json
import logging
import os
import tempfile
from pathlib import Path
from geonft.errors import WriteError

log=logging.getLogger(__name__)


def file_mode(path):
	# Mode for a new output file: the existing file's mode, or 0666 less the umask like open() would give
	try:
		return os.stat(path).st_mode & 0o7777
	except FileNotFoundError:
		umask=os.umask(0)
		os.umask(umask)
		return 0o666 & ~umask


def data_path(output_dir,group):
	return Path(output_dir)/f"{group}_ip_map.json"


def write_atomic(path,text):
	# The file is written next to its destination and renamed into place, so a crash never leaves half a file behind
	path=Path(path)
	tmp_name=None
	try:
		with tempfile.NamedTemporaryFile("w",encoding="utf-8",newline="\n",dir=path.parent,prefix=f".{path.name}.",delete=False) as f:
			tmp_name=f.name
			f.write(text)
		os.chmod(tmp_name,file_mode(path))
		os.replace(tmp_name,path)
	except OSError as e:
		if tmp_name and os.path.exists(tmp_name):
			os.unlink(tmp_name)
		raise WriteError(path,e.strerror or e) from e
	return path


def directory_to_data(directory):
	# {code: {"ipv4": [...], "ipv6": [...]}} keeping directory and feed order
	return {code:{"ipv4":[str(p) for p in entry.ipv4],"ipv6":[str(p) for p in entry.ipv6]} for code,entry in directory.items()}


def write_directory(directory,path):
	text=json.dumps(directory_to_data(directory),indent=2)+"\n"
	write_atomic(path,text)
	log.info(f"Wrote {path} ({len(directory)} countries)")
	return Path(path)
