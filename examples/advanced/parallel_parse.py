"""Thread-safe configuration: parse 1000 docs in parallel."""

from concurrent.futures import ThreadPoolExecutor

from podhtml import ParseConfig, Pod

pod = Pod(
    lambda name: name + ".html",
    lambda is_class, name: name,
    config=ParseConfig(default_indent=2.0),
)

docs = [f"=head1 Doc {i}\n\nContent for document {i}\n" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(pod.parse, docs))

print(f"Parsed {len(results)} documents in parallel")
print("First doc tokens:", len(results[0]))
print("Last doc tokens:", len(results[-1]))
