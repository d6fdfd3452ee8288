"""Sticky note detection library.

This package locates roughly square sticky notes in a photograph and
returns the photograph annotated with detection boxes together with one
cropped sub-image per note.

The main processing pipeline consists of:
1. Splitting the image into green, U and V channels
2. Adaptive thresholding and outer contour extraction per channel
3. Size and aspect ratio filtering of the contours' bounding boxes
4. Containment merge of the duplicates found in different channels
5. Drawing the boxes and cropping the notes

Example:
    Basic usage through the pipeline API:

    >>> import cv2
    >>> from sticky_notes.pipeline import detect_and_annotate
    >>>
    >>> image = cv2.imread("board.jpg")
    >>> result = detect_and_annotate(image)
    >>> len(result.crops)
    3
"""
