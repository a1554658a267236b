import logging
import re
from ipaddress import ip_interface

log=logging.getLogger(__name__)

# address "/" decimal prefix length. Netmask notation and scoped IPv6 addresses are not CIDR.
CIDR=re.compile(r"^([0-9A-Fa-f:.]+)/([0-9]{1,3})$")


def parse_prefix(line):
	"""Return an IPv4Interface/IPv6Interface for one feed line, or None.

	Blank and malformed lines yield None. Host bits are kept as received,
	so str() of the result is the canonical address/prefixlen form of the input.
	"""
	token=line.strip()
	if not token:
		return None
	m=CIDR.match(token)
	if not m:
		return None
	try:
		# ip_interface validates the prefix length against the family width (32/128)
		return ip_interface(token)
	except ValueError:
		return None


def parse_feed(text,version=None):
	# Parses a feed body line by line, keeping feed order and duplicates.
	# When version is given, prefixes of the other family are dropped.
	prefixes=[]
	skipped=0
	for line in text.splitlines():
		prefix=parse_prefix(line)
		if prefix is None:
			if line.strip():
				skipped+=1
				log.debug(f"Skipping malformed line: {line.strip()!r}")
			continue
		if version is not None and prefix.version!=version:
			skipped+=1
			log.debug(f"Skipping IPv{prefix.version} prefix {prefix} in IPv{version} feed")
			continue
		prefixes.append(prefix)
	if skipped:
		log.debug(f"Skipped {skipped} line(s)")
	return prefixes
