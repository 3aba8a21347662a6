import pytest

from platformserver.packet import FrameDecoder, Packet, PacketError, frame


def test_uint32_is_network_order():
    packet = Packet().write_uint32(1)
    assert packet.to_bytes() == b"\x00\x00\x00\x01"


def test_bool_is_one_byte():
    packet = Packet().write_bool(True).write_bool(False)
    assert packet.to_bytes() == b"\x01\x00"


def test_round_trip_of_all_types():
    packet = Packet()
    packet.write_bool(True).write_uint8(5).write_uint32(53000)
    packet.write_int32(-7).write_float(400.0)
    reader = Packet(packet.to_bytes())
    assert reader.read_bool() is True
    assert reader.read_uint8() == 5
    assert reader.read_uint32() == 53000
    assert reader.read_int32() == -7
    assert reader.read_float() == 400.0
    assert reader.end_of_packet()


def test_nonzero_byte_reads_as_true():
    assert Packet(b"\x02").read_bool() is True


def test_reading_past_end_raises():
    reader = Packet(b"\x00\x01")
    with pytest.raises(PacketError):
        reader.read_uint32()


def test_failed_read_does_not_consume():
    reader = Packet(b"\x09")
    with pytest.raises(PacketError):
        reader.read_int32()
    assert reader.read_uint8() == 9


def test_out_of_range_write_raises():
    with pytest.raises(ValueError):
        Packet().write_uint8(256)
    with pytest.raises(ValueError):
        Packet().write_uint32(-1)


def test_empty_packet_is_at_end():
    assert Packet().end_of_packet() is True
    assert Packet(b"x").end_of_packet() is False


def test_frame_prefixes_size():
    assert frame(b"abc") == b"\x00\x00\x00\x03abc"


def test_frame_accepts_packet():
    packet = Packet().write_uint8(4)
    assert frame(packet) == frame(packet.to_bytes())


def test_decoder_handles_split_and_joined_frames():
    decoder = FrameDecoder()
    stream = frame(b"hello") + frame(b"") + frame(b"world")
    assert decoder.feed(stream[:3]) == []
    first = decoder.feed(stream[3:9])
    assert [p.to_bytes() for p in first] == [b"hello"]
    rest = decoder.feed(stream[9:])
    assert [p.to_bytes() for p in rest] == [b"", b"world"]


def test_decoder_byte_by_byte():
    decoder = FrameDecoder()
    payloads = [b"a", b"bc", b"def"]
    received = []
    for byte in b"".join(frame(p) for p in payloads):
        received.extend(p.to_bytes() for p in decoder.feed(bytes([byte])))
    assert received == payloads