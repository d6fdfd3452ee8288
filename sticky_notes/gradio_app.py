"""Gradio web interface for the sticky note detector.

This module creates the interactive web UI for the detection pipeline.
Users upload a photograph, adjust the threshold, filter and merge
parameters, and see the channel masks, the annotated image and the cropped
notes update in real time.

The interface is organized into sections corresponding to each stage:
- Channel binarization with neighborhood size, offset and contrast options
- Candidate filtering and merging with aspect ratio and tolerance controls
- Annotated output and crop gallery
"""

import logging

import cv2
import gradio as gr

from sticky_notes.app_state import load_fixed_image, get_image_id
from sticky_notes.ui_updates import (
    register_upload,
    update_channel_view,
    update_detection_view,
)

logger = logging.getLogger(__name__)

# 1) Load + register the default image once
fixed_image_array = load_fixed_image("img/sticky_notes.jpg")
initial_image_id = (
    get_image_id(fixed_image_array) if fixed_image_array is not None else None
)
initial_image_rgb = (
    cv2.cvtColor(fixed_image_array, cv2.COLOR_BGR2RGB)
    if fixed_image_array is not None
    else None
)

DEFAULT_BLOCK_SIZE = 51
DEFAULT_OFFSET = 1.0
DEFAULT_MAX_ASPECT = 1.1
DEFAULT_COEF = 0.2
DEFAULT_THICKNESS = 3


def refresh_all_views(
    image_id: str | None,
    block_size: int,
    offset: float,
    enhance_contrast: bool,
    max_aspect_ratio: float,
    coef: float,
    thickness: int,
) -> list:
    """Recompute every view for the given image and parameters.

    Returns:
        List of outputs for the channel masks, annotated image, crop
        gallery and status text.
    """
    green, u, v = update_channel_view(image_id, block_size, offset, enhance_contrast)
    annotated, crops, status = update_detection_view(
        image_id,
        block_size,
        offset,
        enhance_contrast,
        max_aspect_ratio,
        coef,
        thickness,
    )
    return [green, u, v, annotated, crops, status]


def initialize_app(image_id: str | None) -> list:
    """Initialize all views with default parameter values."""
    return refresh_all_views(
        image_id,
        DEFAULT_BLOCK_SIZE,
        DEFAULT_OFFSET,
        False,
        DEFAULT_MAX_ASPECT,
        DEFAULT_COEF,
        DEFAULT_THICKNESS,
    )


def create_gradio_interface() -> gr.Blocks:
    """Create and configure the main Gradio web interface.

    Returns:
        Configured Gradio Blocks interface ready for launching.
    """
    with gr.Blocks(title="Sticky Note Detector") as interface:
        gr.Markdown("# Sticky Note Detector")
        gr.Markdown(
            "Upload a photo of sticky notes on a wall or desk. "
            "Adjust parameters and watch each step update in real time."
        )

        # Holds the current image ID across callbacks
        image_state = gr.State(initial_image_id)

        with gr.Row():
            with gr.Column(scale=1):
                source = gr.Image(
                    value=initial_image_rgb,
                    label="Source Image",
                    type="numpy",
                    height=300,
                )

                # 1. Channel binarization
                with gr.Group():
                    gr.Markdown("### 1. Channel Binarization")
                    block_size = gr.Slider(
                        3,
                        151,
                        value=DEFAULT_BLOCK_SIZE,
                        step=2,
                        label="Neighborhood Size",
                        info="Side of the window used for the local mean (odd).",
                    )
                    offset = gr.Slider(
                        -10.0,
                        10.0,
                        value=DEFAULT_OFFSET,
                        step=0.5,
                        label="Offset",
                        info="Constant subtracted from the local mean.",
                    )
                    enhance_contrast = gr.Checkbox(
                        label="Enhance Contrast",
                        value=False,
                        info="Stretch each channel before thresholding.",
                    )
                    with gr.Row():
                        green_view = gr.Image(label="Green", height=200)
                        u_view = gr.Image(label="U (chroma)", height=200)
                        v_view = gr.Image(label="V (chroma)", height=200)

                # 2. Filtering and merging
                with gr.Group():
                    gr.Markdown("### 2. Filtering and Merging")
                    max_aspect = gr.Slider(
                        1.0,
                        3.0,
                        value=DEFAULT_MAX_ASPECT,
                        step=0.05,
                        label="Max Aspect Ratio",
                        info="Longer side divided by shorter side.",
                    )
                    coef = gr.Slider(
                        0.0,
                        0.5,
                        value=DEFAULT_COEF,
                        step=0.01,
                        label="Merge Tolerance",
                        info="How far boxes are grown before testing containment.",
                    )
                    thickness = gr.Slider(
                        1,
                        10,
                        value=DEFAULT_THICKNESS,
                        step=1,
                        label="Line Thickness",
                    )

            with gr.Column(scale=1):
                status = gr.Textbox(label="Detected Notes", value="No notes detected yet")
                annotated_view = gr.Image(label="Detections", height=400)
                crops_gallery = gr.Gallery(label="Cropped Notes", columns=4)

        channel_params = [block_size, offset, enhance_contrast]
        detection_params = channel_params + [max_aspect, coef, thickness]
        output_components = [
            green_view,
            u_view,
            v_view,
            annotated_view,
            crops_gallery,
            status,
        ]

        # INITIALIZE on page load
        interface.load(
            fn=initialize_app,
            inputs=[image_state],
            outputs=output_components,
        )

        # New upload: register, then refresh everything
        source.change(
            fn=register_upload,
            inputs=[source],
            outputs=[image_state],
        ).then(
            fn=refresh_all_views,
            inputs=[image_state] + detection_params,
            outputs=output_components,
        )

        # 1. Channel mask updates
        for p in channel_params:
            p.change(
                fn=update_channel_view,
                inputs=[image_state] + channel_params,
                outputs=[green_view, u_view, v_view],
            )

        # 2. Detection updates
        for p in detection_params:
            p.change(
                fn=update_detection_view,
                inputs=[image_state] + detection_params,
                outputs=[annotated_view, crops_gallery, status],
            )

    return interface


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Reduce logging verbosity for asyncio to suppress connection noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    demo = create_gradio_interface()
    demo.launch(
        share=False,
        debug=True,
        show_error=True,
        server_port=7860,
    )
