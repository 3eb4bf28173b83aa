"""One buffer, several token shapes: swap split strategies between scans."""

import io

from commitscan import AnyByteSplitter, DelimiterSplitter, IncrementalScanner, PatternFinder

scanner = IncrementalScanner(io.BytesIO(b"noise\ncommit abc (HEAD)\nAuthor: A B\nDate:   today\n\n"))
marker = PatternFinder(b"commit ")
words = AnyByteSplitter(b" \n")
lines = AnyByteSplitter(b"\n")
keys = DelimiterSplitter(b":", b" ", b"\n")

print("marker:", scanner.scan(marker.split_just))
print("commit id:", scanner.scan(words))
print("decorations:", scanner.scan(lines))
while (key := scanner.scan(keys)) and keys.stop is None:
    print(f"header {key.decode()!r} = {scanner.scan(lines).decode()!r}")
