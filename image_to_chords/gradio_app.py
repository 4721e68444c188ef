"""Gradio web interface for the chord transposer.

This module creates the web application: the user uploads a photo of sheet
music, the chord symbols found on it are drawn back over the image, and a
stepper transposes every chord by semitones without re-running recognition.
"""

import logging
import sys

import gradio as gr

from image_to_chords.transposition import format_steps
from image_to_chords.ui_updates import (
    load_sample_image,
    register_upload,
    shift_steps,
    update_chord_view,
)

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_WIDTH = 800
SAMPLE_IMAGE_PATH = "img/sample_lead_sheet.png"


def create_gradio_interface(sample_path: str = SAMPLE_IMAGE_PATH) -> gr.Blocks:
    """Create and configure the main Gradio web interface.

    Args:
        sample_path: Image shown and recognized on start, if the file exists.

    Returns:
        Configured Gradio Blocks interface ready for launching.
    """
    sample_image, initial_image_id = load_sample_image(sample_path)

    with gr.Blocks(title="Chord Transposer", delete_cache=(1800, 3600)) as interface:
        gr.Markdown("# 🎸 Chord Transposer")
        gr.Markdown(
            "Upload a photo of a lead sheet. Chord symbols are recognized "
            "and redrawn in the key you choose."
        )

        # Holds the current image ID and transposition across callbacks
        image_state = gr.State(initial_image_id)
        steps_state = gr.State(0)

        with gr.Row():
            with gr.Column(scale=1):
                source = gr.Image(
                    value=sample_image,
                    label="Sheet Music",
                    type="numpy",
                    height=300,
                )
                display_width = gr.Slider(
                    400,
                    1600,
                    value=DEFAULT_DISPLAY_WIDTH,
                    step=50,
                    label="Display Width",
                    info="Width in pixels the chords are laid out for.",
                )
                with gr.Row():
                    down = gr.Button("−")
                    steps_display = gr.Textbox(
                        value=format_steps(0),
                        label="Transposition",
                        interactive=False,
                    )
                    up = gr.Button("+")
                stage_summary = gr.Textbox(label="Recognition Stages", value="")
                chord_list = gr.Textbox(label="Chords", value="")

            with gr.Column(scale=2):
                overlay = gr.Image(label="Transposed Chords")
                with gr.Row():
                    processed = gr.Image(label="Processed Image", height=300)
                    detections = gr.Image(label="Detected Text Regions", height=300)

        view_inputs = [image_state, display_width, steps_state]
        view_outputs = [overlay, processed, detections, chord_list, stage_summary]

        source.change(
            fn=register_upload,
            inputs=[source],
            outputs=[image_state],
        ).then(
            fn=update_chord_view,
            inputs=view_inputs,
            outputs=view_outputs,
        )

        display_width.release(
            fn=update_chord_view,
            inputs=view_inputs,
            outputs=view_outputs,
        )

        for button, delta in ((down, -1), (up, 1)):
            button.click(
                fn=lambda steps, delta=delta: shift_steps(steps, delta),
                inputs=[steps_state],
                outputs=[steps_state, steps_display],
            ).then(
                fn=update_chord_view,
                inputs=view_inputs,
                outputs=view_outputs,
            )

        interface.load(
            fn=update_chord_view,
            inputs=view_inputs,
            outputs=view_outputs,
        )

    return interface


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Reduce logging verbosity for asyncio to suppress connection noise
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    sample_path = sys.argv[1] if len(sys.argv) > 1 else SAMPLE_IMAGE_PATH
    demo = create_gradio_interface(sample_path)
    demo.launch(
        share=False,
        show_error=True,
        server_port=7860,
    )
