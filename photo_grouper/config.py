"""
Configuration constants for the photo grouper.
"""

# --- File Type Definitions ---
RAW_EXTS = {'.cr2', '.cr3', '.nef', '.arw', '.orf', '.rw2', '.dng', '.raf'}
JPEG_EXTS = {'.jpg', '.jpeg', '.jpe'}
VIDEO_EXTS = {'.mp4', '.mov', '.m4v', '.avi', '.mts', '.m2ts', '.3gp', '.mpg', '.mpeg'}

# --- Numbered Filenames ---
# Width of the zero-padded counter in front of the extension (IMG_0815.JPG)
DIGIT_WIDTH = 4
# Camera counters run 0001..9999, there is no 0000
SKIP_ZERO = True

# --- Metadata Properties ---
EXPOSURE_BIAS = 'ExposureBias'
CAMERA_MODEL = 'CameraModel'
DATE_TAKEN = 'DateTaken'

# exifread tag names per property, first hit wins
PROPERTY_TAGS = {
    EXPOSURE_BIAS: ['EXIF ExposureBiasValue'],
    CAMERA_MODEL: ['Image Model'],
    DATE_TAKEN: [
        'EXIF DateTimeOriginal',
        'EXIF DateTimeDigitized',
        'Image DateTime',
    ],
}

# Same properties as reported by `exiftool -j -n`
EXIFTOOL_FIELDS = {
    EXPOSURE_BIAS: ['ExposureCompensation', 'ExposureBiasValue'],
    CAMERA_MODEL: ['Model', 'CameraModelName'],
    DATE_TAKEN: ['DateTimeOriginal', 'CreateDate'],
}

# Capture dates are handed out in the shell display form: "\u200e31.12.2015 10:00"
DATE_TAKEN_FORMAT = "\u200e%d.%m.%Y %H:%M"

# --- HDR Brackets ---
BRACKET_SIZE = 5
# Last frame of every bracket
HDR_ANCHOR = 2
HDR_ORDERINGS = [
    (0, -1, 1, -2, 2),
    (-2, -1, 0, 1, 2),
    (0, -2, -1, 1, 2),
]

# --- Folder Naming ---
PANORAMA_FOLDER_PATTERN = "Panorama {number:02d}"
DAY_FOLDER_PREFIX = "Tag "
DAY_FOLDER_UNKNOWN = "Tag unbekannt"
# Day digits sit right behind the leading direction mark of DATE_TAKEN_FORMAT
DAY_OFFSET = 1
DAY_WIDTH = 2
# Anything this short cannot hold a date
MIN_DATE_LENGTH = 9

# --- Organize Pipeline ---
HDR_FOLDER = "HDR"
HDR_PARTNER_FOLDER = "HDR/RAW"
PANORAMA_FOLDER = "Panorama"
PANORAMA_PARTNER_FOLDER = "Panorama/RAW"
JPEG_FOLDER = "JPG"
RAW_FOLDER = "RAW"
VIDEO_FOLDER = "Videos"
LOG_FILE = "organizer.log"
