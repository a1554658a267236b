# Country-group IP block lists rendered as nftables rule-sets

__version__="0.3.0"
