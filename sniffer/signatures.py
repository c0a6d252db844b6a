# sniffer/signatures.py

"""
Magic byte table.

Entries are checked top to bottom and the first hit wins, so a longer or
more specific pattern has to come before any shorter one it starts with
(`%PDF-1.7` before `%PDF`, `PKLITE` before `PK`, and so on).
"""
from __future__ import annotations
from typing import Tuple

from .model import (
    COMPOUND_DOCUMENT,
    EXECUTABLE,
    RIFF_CONTAINER,
    ZIP_CONTAINER,
    SignatureEntry,
)

# Enough to cover every pattern below, including the offset 4 box signatures.
WINDOW_SIZE = 128


def _sig(pattern: bytes, extension: str, description: str, offset: int = 0) -> SignatureEntry:
    return SignatureEntry(offset=offset, pattern=pattern, extension=extension, description=description)


def _tagged(pattern: bytes, tag: str, description: str) -> SignatureEntry:
    return SignatureEntry(offset=0, pattern=pattern, extension="", description=description, tag=tag)


SIGNATURES: Tuple[SignatureEntry, ...] = (
    # --- Microsoft compound documents --------------------------------------------
    _tagged(b"\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1", COMPOUND_DOCUMENT,
            "Microsoft Office applications (Word, Powerpoint, Excel, Works)"),

    # --- ZIP family ---------------------------------------------------------------
    _sig(b"PK\x03\x04\x14\x00\x01\x00", ".zip", "ZLock Pro encrypted ZIP"),
    _sig(b"PKLITE", ".zip", "PKLITE compressed ZIP archive (see also PKZIP)"),
    _sig(b"PKSFX", ".zip", "PKSFX self-extracting executable compressed file (see also PKZIP)"),
    _tagged(b"PK", ZIP_CONTAINER, "Zip or Microsoft Office 2007 document"),
    _sig(b"WinZip", ".zip", "WinZip compressed archive"),
    _sig(b"7z\xBC\xAF\x27\x1C", ".7z", "7-Zip compressed file"),
    _sig(b"\x1F\x8B\x08", ".gz", "GZIP archive file"),

    # --- PDF ----------------------------------------------------------------------
    _sig(b"%PDF-1.7", ".pdf", "Adobe Portable Document file (version 1.7)"),
    _sig(b"%PDF-1.6", ".pdf", "Adobe Portable Document file (version 1.6)"),
    _sig(b"%PDF-1.5", ".pdf", "Adobe Portable Document file (version 1.5)"),
    _sig(b"%PDF-1.4", ".pdf", "Adobe Portable Document file (version 1.4)"),
    _sig(b"%PDF-1.3", ".pdf", "Adobe Portable Document file (version 1.3)"),
    _sig(b"%PDF-1.2", ".pdf", "Adobe Portable Document file (version 1.2)"),
    _sig(b"%PDF-1.1", ".pdf", "Adobe Portable Document file (version 1.1)"),
    _sig(b"%PDF-1.0", ".pdf", "Adobe Portable Document file (version 1.0)"),
    _sig(b"%PDF", ".pdf", "Adobe Portable Document file"),

    # --- Mail, web and office leftovers -------------------------------------------
    _sig(b"bplist", ".webarchive", "Safari webarchive"),
    _sig(b"\x78\x9F\x3E\x22", ".dat", "Microsoft Outlook winmail.dat file"),
    _sig(b"{\\rtf1", ".rtf", "Rich Text Format"),
    _sig(b"\xC5\x00\x00\x00\x00\x00\x0D", ".cold", "FileNet COLD document"),

    # --- Developer files ----------------------------------------------------------
    _sig(b"# Microsoft Developer Studio", ".dsp", "Microsoft Developer Studio project file"),
    _sig(b"dswfile", ".dsp", "Microsoft Visual Studio workspace file"),
    _sig(b"#!/usr/bin/perl", ".pl", "Perl script file"),

    # --- Corel Paint Shop Pro -----------------------------------------------------
    _sig(b"Paint Shop Pro Image File", ".pspimage", "Corel Paint Shop Pro Image file"),
    _sig(b"JASC BROWS FILE", ".jbf", "Corel Paint Shop Pro browse file"),

    # --- Microsoft Access ---------------------------------------------------------
    _sig(b"\x00\x01\x00\x00Standard Jet DB", ".mdb", "Microsoft Access file"),
    _sig(b"\x00\x01\x00\x00Standard ACE DB", ".accdb", "Microsoft Access 2007 file"),

    # --- Microsoft Outlook --------------------------------------------------------
    _sig(b"\x9C\xCB\xCB\x8D\x13\x75\xD2\x11\x91\x58\x00\xC0\x4F\x79\x56\xA4", ".wab",
         "Outlook address file"),
    _sig(b"!BD", ".pst", "Microsoft Outlook Personal Folder File"),

    # --- XML ----------------------------------------------------------------------
    _sig(b'<?xml version="1.0"?>', ".xml", "XML File"),
    _sig(b'<?xml version="1.0" encoding="utf-16"', ".xml", "XML File (UTF16 encoding)"),
    _sig(b'<?xml version="1.0" encoding="utf-8"', ".xml", "XML File (UTF8 encoding)"),
    _sig(b'<?xml version="1.0" encoding="utf-7"', ".xml", "XML File (UTF7 encoding)"),

    # --- E-mail -------------------------------------------------------------------
    _sig(b"Return-Path: ", ".eml", "A common file extension for e-mail files"),
    _sig(b"From ???", ".eml", "E-mail markup language file"),
    _sig(b"From   ", ".eml", "E-mail markup language file"),
    _sig(b"From: ", ".eml", "E-mail markup language file"),

    # --- TIFF ---------------------------------------------------------------------
    _sig(b"MM\x00\x2B", ".tif", "BigTIFF files; Tagged Image File Format files > 4 GB"),
    _sig(b"MM\x00\x2A", ".tif", "Tagged Image File Format file (big endian, i.e., LSB last in the byte; Motorola)"),
    _sig(b"II\x2A\x00", ".tif", "Tagged Image File Format file (little endian, i.e., LSB first in the byte; Intel)"),
    _sig(b"I I", ".tif", "Tagged Image File Format file"),

    # --- AutoCAD ------------------------------------------------------------------
    _sig(b"AC1002", ".dwg", "Generic AutoCAD drawing - AutoCAD R2.5"),
    _sig(b"AC1003", ".dwg", "Generic AutoCAD drawing - AutoCAD R2.6"),
    _sig(b"AC1004", ".dwg", "Generic AutoCAD drawing - AutoCAD R9"),
    _sig(b"AC1006", ".dwg", "Generic AutoCAD drawing - AutoCAD R10"),
    _sig(b"AC1009", ".dwg", "Generic AutoCAD drawing - AutoCAD R11/R12"),
    _sig(b"AC1010", ".dwg", "Generic AutoCAD drawing - AutoCAD R13 (subtype 10)"),
    _sig(b"AC1011", ".dwg", "Generic AutoCAD drawing - AutoCAD R13 (subtype 11)"),
    _sig(b"AC1012", ".dwg", "Generic AutoCAD drawing - AutoCAD R13 (subtype 12)"),
    _sig(b"AC1013", ".dwg", "Generic AutoCAD drawing - AutoCAD R13 (subtype 13)"),
    _sig(b"AC1014", ".dwg", "Generic AutoCAD drawing - AutoCAD R13 (subtype 14)"),
    _sig(b"AC1015", ".dwg", "Generic AutoCAD drawing - AutoCAD R2000"),
    _sig(b"AC1018", ".dwg", "Generic AutoCAD drawing - AutoCAD R2004"),
    _sig(b"AC1021", ".dwg", "Generic AutoCAD drawing - AutoCAD R2007"),

    # --- ISO base media, box size first -------------------------------------------
    # These carry the box length at offset 0 and must be tried before the
    # offset 4 brand entries further down, which would otherwise catch them.
    _sig(b"\x00\x00\x00\x20ftypheic", ".heif", "HEIF/HEVC"),
    _sig(b"\x00\x00\x00\x18ftypheic", ".heif", "HEIF/HEVC"),
    _sig(b"\x00\x00\x00\x24ftypheic", ".heif", "HEIF/HEVC"),
    _sig(b"\x00\x00\x00\x20ftypM4A \x00\x00\x00\x00", ".mov", "Apple QuickTime movie file"),
    _sig(b"\x00\x00\x00\x20ftypM4A", ".m4a", "Apple audio and video files"),
    _sig(b"\x00\x00\x00\x18ftypmp42", ".mp4", "MPEG-4 video files"),
    _sig(b"\x00\x00\x00\x18ftyp3gp5", ".mp4", "MPEG-4 video files"),

    # --- Images -------------------------------------------------------------------
    _sig(b"\xD7\xCD\xC6\x9A", ".wmf", "Windows metafile"),
    _sig(b"\xFF\xD8\xFF\xDB", ".jpg", "Samsung D807 JPEG file"),
    _sig(b"\xFF\xD8\xFF\xE0", ".jpg", "JPEG/JIFF file"),
    _sig(b"\xFF\xD8\xFF\xE1", ".jpg", "JPEG/Exif file"),
    _sig(b"\xFF\xD8\xFF\xE2", ".jpg", "Canon EOS-1D JPEG file"),
    _sig(b"\xFF\xD8\xFF\xE3", ".jpg", "Samsung D500 JPEG file"),
    _sig(b"\xFF\xD8\xFF\xE8", ".jpg", "Still Picture Interchange File Format (SPIFF)"),

    _tagged(b"RIFF", RIFF_CONTAINER, "WAV or AVI"),

    _sig(b"\x89PNG", ".png", "Portable Network Graphics"),

    # --- RealMedia ----------------------------------------------------------------
    _sig(b".RMF\x00\x00\x00\x12\x00", ".ra", "RealAudio file"),
    _sig(b".ra\xFD\x00", ".ra", "RealAudio streaming media file"),
    _sig(b".REC", ".ivr", "RealPlayer video file (V11 and later)"),
    _sig(b".RMF", ".rm", "RealMedia streaming media file"),

    _sig(b"ID3", ".mp3", "MPEG-1 Audio Layer 3 (MP3) audio file"),

    # --- Bitmaps ------------------------------------------------------------------
    _sig(b"\x00\x01\x00\x08\x00\x01\x00\x01\x01", ".img", "Image Format Bitmap file"),
    _sig(b"PICT\x00\x08", ".img", "ADEX Corp. ChromaGraph Graphics Card Bitmap Graphic file"),
    _sig(b"SCMI", ".img", "Img Software Set Bitmap"),
    _sig(b"GIF87a", ".gif", "Graphics interchange format file (GIF87a)"),
    _sig(b"GIF89a", ".gif", "Graphics interchange format file (GIF89a)"),
    _sig(b"BM", ".bmp", "Windows (or device-independent) bitmap image"),

    _sig(b"MThd", ".mdi", "Musical Instrument Digital Interface (MIDI) sound file"),
    _sig(b"EP", ".mdi", "Microsoft Document Imaging file"),

    _sig(b"\x32\xBE", ".wri", "Microsoft Write file"),
    _sig(b"\x31\xBE", ".wri", "Microsoft Write file"),

    _sig(b"\x1A\x02", ".arc", "LH archive file"),
    _sig(b"\x1A\x03", ".arc", "LH archive file"),
    _sig(b"\x1A\x04", ".arc", "LH archive file"),
    _sig(b"\x1A\x08", ".arc", "LH archive file"),
    _sig(b"\x1A\x09", ".arc", "LH archive file"),

    # --- Windows system files -----------------------------------------------------
    _sig(b"ElfFile\x00", ".evtx", "Windows Vista event log file"),
    _sig(b"\x30\x00\x00\x00LfLe", ".evt", "Windows Event Viewer file"),
    _sig(b"\x00\x00\xFF\xFF\xFF\xFF", ".hlp", "Windows help file"),
    _sig(b"LN\x02\x00", ".hlp", "Windows Help file"),
    _sig(b"?_\x03\x00", ".hlp", "Windows help file"),
    _sig(b"ITSF", ".chm", "Microsoft Compiled HTML Help File"),

    _sig(b"FWS", ".swf", "Macromedia Shockwave Flash player file"),
    _sig(b"CWS", ".swf", "Shockwave Flash file (v5+)"),

    _sig(b"MSCF", ".cab", "Microsoft cabinet file"),
    _sig(b"ISc(", ".cab", "Install Shield v5.x or 6.x compressed file"),

    _sig(b"BEGIN:VCARD", ".vcf", "vCard file"),
    _sig(b"Rar!\x1A\x07\x00", ".rar", "WinRAR compressed archive file"),
    _sig(b"-lh", ".lha", "Compressed archive file"),
    _sig(b"8BPS", ".psd", "Photoshop image file"),
    _sig(b"\x0B\x77", ".ac3", "Dolby Digital AC-3 audio file"),

    # --- Audio and video ----------------------------------------------------------
    _sig(b"\x1A\x45\xDF\xA3\x93\x42\x82\x88matroska", ".mkv", "Matroska open movie format"),
    _sig(b"OggS", ".opus", "Opus Interactive Audio Codec"),
    _sig(b"\x30\x26\xB2\x75\x8E\x66\xCF\x11\xA6\xD9\x00\xAA\x00\x62\xCE\x6C", ".wmv",
         "Microsoft Windows Media Audio/Video File (Advanced Streaming Format)"),

    _sig(b"ftyp3gp", ".3gp", "3rd Generation Partnership Project 3GPP multimedia files", offset=4),
    _sig(b"ftypM4A", ".m4a", "Apple Lossless Audio Codec file", offset=4),
    _sig(b"ftypM4V", ".m4v", "ISO Media, MPEG v4 system, or iTunes AVC-LC file", offset=4),
    _sig(b"ftypMSNV", ".mp4", "MPEG-4 video file", offset=4),
    _sig(b"ftypisom", ".mp4", "ISO Base Media file (MPEG-4) v1", offset=4),
    _sig(b"ftypmp42", ".m4v", "MPEG-4 video|QuickTime file", offset=4),
    _sig(b"ftypqt", ".mov", "QuickTime movie file", offset=4),
    _sig(b"moov", ".mov", "QuickTime movie file", offset=4),

    _sig(b"TAPE", ".bkf", "Windows NT Backup file (NTBackup)"),
    _sig(b"Windows Registry Editor Version 5.00", ".reg", "Windows Registry Editor Version 5.00 file"),

    # --- Others -------------------------------------------------------------------
    _sig(b"\x00\x05\x16\x07\x00\x02\x00\x00Mac OS X", ".macosxattr", "Mac OS X - Attribute file"),
    _sig(b"\x30\x26\xB2\x75\x8E\x66\xCF\x11", ".wmv", "Advanced Systems Format"),
    _sig(b"\xA6\xD9\x00\xAA\x00\x62\xCE\x6C", ".wmv", "Advanced Systems Format"),
    _sig(b"II\x1A\x00\x00\x00HEAPCCDR\x02\x00", ".crw", "Canon digital camera RAW file"),
    _sig(b"L\x00\x00\x00\x01\x14\x02\x00", ".lnk", "Windows shortcut file"),
    _sig(b"REGEDIT", ".reg", "Windows NT Registry and Registry Undo files"),
    _sig(b"CPTFILE", ".cpt", "Corel Photopaint file"),
    _sig(b"JARCS\x00", ".jar", "JARCS compressed archive"),
    _sig(b"FORM\x00", ".aiff", "Audio Interchange File"),
    _sig(b"KI\x00\x00", ".shd", "Windows 9x printer spool file"),
    _sig(b"FLV\x01", ".flv", "Flash video file"),
    _sig(b"\x01\x0F\x00\x00", ".mdf", "Microsoft SQL Server 2000 database"),
    _sig(b"\x00\x00\x02\x00", ".cur", "Windows cursor file"),
    _sig(b"\x00\x00\x01\xBA", ".vob", "DVD Video Movie File (video/dvd, video/mpeg)"),
    _sig(b"\x00\x00\x01\x00", ".ico", "Windows icon file"),
    _tagged(b"MZ", EXECUTABLE, "EXE or DLL file"),

    _sig(b"\x01\x00\x00\x00", ".emf", "Extended (Enhanced) Windows Metafile Format"),
)
