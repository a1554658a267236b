class FetchError(Exception):
	# Raised when a feed cannot be retrieved or decoded. Carries the URL.
	def __init__(self,url,reason):
		self.url=url
		self.reason=reason
		super().__init__(f"Unable to fetch {url}: {reason}")


class WriteError(OSError):
	# Raised when an output file cannot be created or written. Carries the target path.
	def __init__(self,path,reason):
		self.path=str(path)
		self.reason=reason
		super().__init__(f"Unable to write {self.path}: {reason}")
