from unittest import TestCase

from davstat.lib import error
from davstat.lib.python_utilities import to_wire
from davstat.lib.url import basename
from davstat.lib.url import decode_href
from davstat.lib.url import encode_path
from davstat.lib.url import normalise_path


class TestUtils(TestCase):
    def test_to_wire(self):
        # fmt: off
        self.assertEqual(to_wire('blatti'), b'blatti')
        self.assertEqual(to_wire(b'blatti'), b'blatti')
        self.assertEqual(to_wire('ยากจน'), 'ยากจน'.encode('utf-8'))
        self.assertEqual(to_wire(''), b'')
        self.assertEqual(to_wire(None), None)
        # fmt: on

    def test_normalise_path(self):
        self.assertEqual(normalise_path("/"), "/")
        self.assertEqual(normalise_path(""), "/")
        self.assertEqual(normalise_path("alrighty.jpg"), "/alrighty.jpg")
        self.assertEqual(normalise_path("/webdav/server/"), "/webdav/server")
        self.assertEqual(normalise_path("/two%20words"), "/two%20words")

    def test_encode_path(self):
        self.assertEqual(encode_path("/two words/"), "/two%20words/")
        self.assertEqual(encode_path("/with & in path"), "/with%20%26%20in%20path")
        self.assertEqual(encode_path("/two%20words"), "/two%2520words")
        self.assertEqual(encode_path("/it's (fine)!"), "/it's%20(fine)!")

    def test_decode_href(self):
        self.assertEqual(decode_href("/two%20words/file.txt"), "/two words/file.txt")
        self.assertEqual(decode_href("/file%20%25%20name.txt"), "/file % name.txt")
        self.assertEqual(decode_href("/a%2Fb"), "/a/b")

    def test_basename(self):
        self.assertEqual(basename("/"), "")
        self.assertEqual(basename("/webdav/server"), "server")
        self.assertEqual(basename("/sub1/"), "sub1")
        self.assertEqual(basename("file.txt"), "file.txt")


class TestErrors(TestCase):
    def test_remote_status_error(self):
        err = error.RemoteStatusError("/does-not-exist", status=423, status_text="Locked")
        self.assertEqual(err.status, 423)
        self.assertEqual(err.reason, "Invalid response: 423 Locked")
        self.assertEqual(err.url, "/does-not-exist")
        self.assertEqual(str(err), "Invalid response: 423 Locked")
        self.assertEqual(
            str(error.RemoteStatusError("/x", status=404, status_text="Not Found")),
            "Invalid response: 404 Not Found",
        )
        self.assertIsInstance(err, error.ResponseError)
        self.assertIsInstance(err, error.DAVError)

    def test_default_reasons(self):
        self.assertEqual(
            str(error.MalformedResponseError()),
            "MalformedResponseError: Invalid response: No root multistatus found",
        )
        self.assertEqual(
            str(error.BadStatResponseError("/x")),
            "BadStatResponseError at '/x', reason Failed getting item stat: bad response",
        )
