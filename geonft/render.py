import logging
from enum import Enum
from pathlib import Path
from geonft.store import write_atomic

log=logging.getLogger(__name__)

DEFAULT_TABLE="geonft"
DEFAULT_CHAIN="input"
INDENT="\t"


class Policy(Enum):
	ALLOW="allow"
	BLOCK="block"

	def __str__(self):
		return self.value


# (verdict on set match, final verdict)
VERDICTS={
	Policy.BLOCK:("drop","accept"),
	Policy.ALLOW:("accept","drop"),
}


def ruleset_path(output_dir,group,policy):
	return Path(output_dir)/f"{group}_{Policy(policy)}.nft"


def collect(directory,family,dedupe=False):
	# Union of every country's prefixes in directory order. Duplicates stay unless dedupe is asked for.
	prefixes=[str(p) for entry in directory.values() for p in getattr(entry,family)]
	if dedupe:
		prefixes=list(dict.fromkeys(prefixes))
	return prefixes


def render_set(name,addr_type,prefixes):
	lines=[
		f"{INDENT}set {name} {{",
		f"{INDENT*2}type {addr_type}",
		f"{INDENT*2}flags interval",
	]
	# nft rejects an empty element list, so an empty set is declared without one
	if prefixes:
		lines.append(f"{INDENT*2}elements = {{")
		lines+=[f"{INDENT*3}{p}," for p in prefixes[:-1]]
		lines.append(f"{INDENT*3}{prefixes[-1]}")
		lines.append(f"{INDENT*2}}}")
	lines.append(f"{INDENT}}}")
	return lines


def render_ruleset(directory,policy,table=DEFAULT_TABLE,chain=DEFAULT_CHAIN,dedupe=False):
	"""Return the nftables rule-set text for a country directory.

	Layout: one inet table holding an IPv4 set, an IPv6 set and a single input
	chain whose rules are always set4 match, set6 match, then the catch-all verdict.
	"""
	policy=Policy(policy)
	match_verdict,default_verdict=VERDICTS[policy]
	set4=f"{table}_ipv4"
	set6=f"{table}_ipv6"
	lines=[f"table inet {table} {{"]
	lines+=render_set(set4,"ipv4_addr",collect(directory,"ipv4",dedupe))
	lines.append("")
	lines+=render_set(set6,"ipv6_addr",collect(directory,"ipv6",dedupe))
	lines.append("")
	lines+=[
		f"{INDENT}chain {chain} {{",
		f"{INDENT*2}type filter hook input priority 0;",
		f"{INDENT*2}ip saddr @{set4} {match_verdict}",
		f"{INDENT*2}ip6 saddr @{set6} {match_verdict}",
		f"{INDENT*2}{default_verdict}",
		f"{INDENT}}}",
		"}",
	]
	return "\n".join(lines)+"\n"


def write_ruleset(directory,policy,path,table=DEFAULT_TABLE,chain=DEFAULT_CHAIN,dedupe=False):
	text=render_ruleset(directory,policy,table,chain,dedupe)
	write_atomic(path,text)
	log.info(f"Wrote {path} ({Policy(policy)} policy)")
	return Path(path)
