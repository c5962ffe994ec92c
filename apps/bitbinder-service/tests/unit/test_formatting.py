from bitbinder.utils.formatting import extension_for_mime, format_duration, format_timer


def test_format_duration():
    assert format_duration(None) == "0:00"
    assert format_duration(0) == "0:00"
    assert format_duration(5) == "0:05"
    assert format_duration(65.9) == "1:05"
    assert format_duration(3600) == "60:00"


def test_format_timer_pads_minutes():
    assert format_timer(0) == "00:00"
    assert format_timer(125) == "02:05"


def test_extension_for_mime():
    assert extension_for_mime("audio/ogg; codecs=opus") == "ogg"
    assert extension_for_mime("audio/mp4") == "mp4"
    assert extension_for_mime("audio/webm") == "webm"
    assert extension_for_mime(None) == "webm"
