import json
import pytest
from ipaddress import ip_interface
from pathlib import Path
from geonft.errors import WriteError
from geonft.resolver import CountryEntry
from geonft.store import data_path,directory_to_data,write_atomic,write_directory


def entry(code,name,ipv4=(),ipv6=()):
	return CountryEntry(code,name,tuple(ip_interface(p) for p in ipv4),tuple(ip_interface(p) for p in ipv6))


def test_data_path(tmp_path):
	assert data_path(tmp_path,"brics")==tmp_path/"brics_ip_map.json"


def test_testland_document(tmp_path):
	directory={"xx":entry("xx","Testland",["10.0.0.0/8","192.168.1.0/24"],["2001:db8::/32"])}
	path=write_directory(directory,tmp_path/"out.json")
	assert json.loads(path.read_text())=={"xx":{"ipv4":["10.0.0.0/8","192.168.1.0/24"],"ipv6":["2001:db8::/32"]}}


def test_key_and_prefix_order_follow_directory():
	directory={
		"zz":entry("zz","Zulu",["10.2.0.0/16","10.1.0.0/16","10.2.0.0/16"]),
		"aa":entry("aa","Alpha",[],["2001:db8::/32"]),
	}
	data=directory_to_data(directory)
	assert list(data)==["zz","aa"]
	assert data["zz"]["ipv4"]==["10.2.0.0/16","10.1.0.0/16","10.2.0.0/16"]
	assert data["aa"]=={"ipv4":[],"ipv6":["2001:db8::/32"]}


def test_output_is_reproducible(tmp_path):
	directory={"xx":entry("xx","Testland",["10.0.0.0/8"],["2001:db8::/32"])}
	first=write_directory(directory,tmp_path/"a.json").read_bytes()
	second=write_directory(directory,tmp_path/"b.json").read_bytes()
	assert first==second
	assert first.endswith(b"\n")


def test_write_atomic_replaces_and_leaves_no_temp_files(tmp_path):
	target=tmp_path/"file.txt"
	target.write_text("old")
	write_atomic(target,"new\n")
	assert target.read_text()=="new\n"
	assert [p.name for p in tmp_path.iterdir()]==["file.txt"]


def test_unwritable_destination(tmp_path):
	target=tmp_path/"missing"/"out.json"
	with pytest.raises(WriteError) as info:
		write_directory({},target)
	assert info.value.path==str(target)
	assert isinstance(info.value,OSError)
	assert not target.exists()


def test_new_file_mode_follows_umask(tmp_path):
	plain=tmp_path/"plain.json"
	plain.write_text("x")
	written=write_atomic(tmp_path/"out.json","x")
	assert written.stat().st_mode&0o7777==plain.stat().st_mode&0o7777


def test_replacing_keeps_existing_mode(tmp_path):
	target=tmp_path/"out.nft"
	target.write_text("old")
	target.chmod(0o640)
	write_atomic(target,"new\n")
	assert target.stat().st_mode&0o7777==0o640
