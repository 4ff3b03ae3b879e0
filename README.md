# vidfetch

vidfetch reads video and image pages and reports what can be downloaded
from them: the title, the available streams (qualities), and the URL, size
and extension of every part of each stream. It also has helpers to merge
downloaded parts with `ffmpeg`.

## Installation

```
pip install .
```

Merging parts needs the `ffmpeg` executable on your `PATH`.

## Extracting stream information

Each supported site has a module under `vidfetch.extractors` with a `new()`
function returning an `Extractor`. `extract(url, option)` returns a list of
`vidfetch.models.Data` objects:

```python
from vidfetch.extractors import universal
from vidfetch.models import Options

extractor = universal.new()
for data in extractor.extract("https://example.com/picture.jpg", Options()):
    data.fill_up_streams_data()
    for stream_id, stream in data.streams.items():
        print(stream_id, stream.quality, stream.size, [p.url for p in stream.parts])
```

Extractor modules: `tangdou`, `tiktok`, `tumblr`, `udn`, `universal`,
`vimeo`, `xvideos`, `yinyuetai` and `youku`.

- `universal` treats the URL itself as a single file; its name and extension
  come from the URL path, or from the `Content-Type` when the path has none.
- `tangdou` extracts a whole playlist when `Options.playlist` is set. The
  items are chosen with `items` (such as `"1,5,6,8-10"`) or with
  `item_start` and `item_end` (an end of 0 means the last item), and are
  fetched by up to `thread_number` worker threads. A video that fails is
  returned as a `Data` whose `error` holds the exception.
- `youku` uses `Options.cookie` (for the `cna` value), `youku_ccode`,
  `youku_ckey` and `youku_password`.

Other failures are raised: `URLParseFailedError` when a page lacks the
expected data, `RequestError` when HTTP fails, and `RuntimeError` when a
site's API reports an error.

`Data.fill_up_streams_data()` fills in each stream's id, its quality (the id
when none is given), the merged extension of video streams (`ts`, `flv` and
`f4v` become `mp4`) and the total size. `Data.to_dict()` returns a
JSON-ready dictionary.

## HTTP settings

All requests share the settings in `vidfetch.request`:

```python
from vidfetch.request import RequestOptions, set_options

set_options(RequestOptions(retry_times=5, cookie="", refer="", debug=False))
```

A failed request or an HTTP status of 400 or more is tried again once a
second until `retry_times` attempts have been made, then `RequestError` is
raised. The cookie may be a plain `Cookie` header value or the text of a
Netscape cookie file. A non-empty `refer` replaces the `Referer` of every
request; `debug` prints each request's URL, method, headers and status.
`get`, `get_bytes`, `headers`, `size` and `content_type` build on `request`.

## Helpers

- `vidfetch.utils`: regex matching (`match_one_of`, `match_all`), dotted
  JSON lookups (`get_string_from_json`), file name sanitising (`file_name`,
  `file_path`, `limit_length`), input file reading (`parse_input_file`,
  `file_line_counter`), `get_name_and_ext`, `m3u8_urls`, `domain`, `md5`
  and `reverse`.
- `vidfetch.download`: `need_download_list` turns an item selection into
  1-based indices; `number_range` gives an inclusive range.
- `vidfetch.parser`: `get_doc`, `title` and `get_images` for HTML pages.
- `vidfetch.ffmpeg`: `merge_to_mp4` and `merge_files_with_same_extension`;
  the parts are deleted after a successful merge and `MergeError` is raised
  when `ffmpeg` fails.
- `vidfetch.pool.WaitGroupPool`: counts running workers and limits how many
  run at once.

## What vidfetch does not do

vidfetch has no command-line program and no web server, and it does not
download the stream parts itself: it reports their URLs and sizes, and
fetching them is left to the caller. It does not read cookies from a
browser, and it has no extractors beyond the modules listed above.

## Running the tests

```
pip install ".[test]"
pytest
```