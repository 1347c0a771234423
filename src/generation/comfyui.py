"""ComfyUI client for self-hosted Flux image generation."""

import logging
import random
import time
from http import HTTPStatus
from typing import Any
from urllib.parse import urlencode

import requests
from pydantic import BaseModel, Field

from src.generation.exceptions import GenerationClientError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30

DEFAULT_LORA_NAME = "lora.safetensors"
DEFAULT_LORA_STRENGTH = 0.8

# First node ID used for the generated LoRA chain
_LORA_NODE_START = 72

_LORA_LOADER_NODES = ("LoraLoader", "LoraLoaderModelOnly")


class LoraSpec(BaseModel):
    """A LoRA to apply to the base model."""

    name: str = Field(..., min_length=1, description="LoRA file name on the ComfyUI host")
    strength: float = Field(DEFAULT_LORA_STRENGTH, ge=-10, le=10, description="Model strength")


def _node(class_type: str, title: str, **inputs: Any) -> dict[str, Any]:
    return {"inputs": inputs, "class_type": class_type, "_meta": {"title": title}}


def build_workflow(
    prompt: str,
    loras: list[LoraSpec] | None = None,
    *,
    seed: int | None = None,
    size: int = 512,
) -> dict[str, Any]:
    """Build a Flux text-to-image workflow graph.

    The base UNET is passed through each LoRA in order; the last LoRA feeds
    the Flux model sampler.

    :param prompt: Positive prompt text.
    :param loras: LoRAs to chain. Defaults to a single generic LoRA.
    :param seed: Noise seed. A random seed is used if not given.
    :param size: Output width and height in pixels.
    :returns: The workflow in ComfyUI API format, keyed by node ID.
    """
    if seed is None:
        seed = random.randrange(10**15)
    if not loras:
        loras = [LoraSpec(name=DEFAULT_LORA_NAME)]

    workflow: dict[str, Any] = {
        "6": _node("CLIPTextEncode", "CLIP Text Encode (Prompt)", text=prompt, clip=["11", 0]),
        "8": _node("VAEDecode", "VAE Decode", samples=["13", 0], vae=["10", 0]),
        "9": _node("SaveImage", "Save Image", filename_prefix="MarkuryFLUX", images=["8", 0]),
        "10": _node("VAELoader", "Load VAE", vae_name="ae.sft"),
        "11": _node(
            "DualCLIPLoader",
            "DualCLIPLoader",
            clip_name1="t5xxl_fp8_e4m3fn.safetensors",
            clip_name2="clip_l.safetensors",
            type="flux",
            device="default",
        ),
        "12": _node(
            "UNETLoader",
            "Load Diffusion Model",
            unet_name="flux1-dev.safetensors",
            weight_dtype="fp8_e4m3fn",
        ),
        "13": _node(
            "SamplerCustomAdvanced",
            "SamplerCustomAdvanced",
            noise=["25", 0],
            guider=["22", 0],
            sampler=["16", 0],
            sigmas=["17", 0],
            latent_image=["91", 0],
        ),
        "16": _node("KSamplerSelect", "KSamplerSelect", sampler_name="euler_ancestral"),
        "17": _node(
            "BasicScheduler",
            "BasicScheduler",
            scheduler="normal",
            steps=25,
            denoise=1,
            model=["61", 0],
        ),
        "22": _node("BasicGuider", "BasicGuider", model=["61", 0], conditioning=["60", 0]),
        "25": _node("RandomNoise", "RandomNoise", noise_seed=seed),
        "60": _node("FluxGuidance", "FluxGuidance", guidance=3.5, conditioning=["6", 0]),
        "61": _node(
            "ModelSamplingFlux",
            "ModelSamplingFlux",
            max_shift=1.15,
            base_shift=0.5,
            width=size,
            height=size,
            model=None,
        ),
        "91": _node("EmptyLatentImage", "Empty Latent Image", width=size, height=size, batch_size=1),
    }

    current_model: list[Any] = ["12", 0]
    for index, lora in enumerate(loras):
        node_id = str(_LORA_NODE_START + index)
        workflow[node_id] = _node(
            "LoraLoaderModelOnly",
            f"LoraLoaderModelOnly {index + 1}",
            lora_name=lora.name,
            strength_model=lora.strength,
            model=current_model,
        )
        current_model = [node_id, 0]

    workflow["61"]["inputs"]["model"] = current_model
    return workflow


class ComfyUIClient:
    """Client for the ComfyUI HTTP API.

    Generation is asynchronous on the ComfyUI side: a workflow is queued with
    ``/prompt`` and its outputs appear in ``/history/<prompt_id>`` once done.
    """

    def __init__(
        self,
        base_url: str,
        *,
        poll_attempts: int = 25,
        poll_interval: float = 5.0,
    ) -> None:
        """Initialise the ComfyUI client.

        :param base_url: Base URL of the ComfyUI server.
        :param poll_attempts: Maximum number of history checks per generation.
        :param poll_interval: Seconds to wait between history checks.
        """
        self.base_url = base_url.rstrip("/")
        self.poll_attempts = poll_attempts
        self.poll_interval = poll_interval

    def generate_image(self, prompt: str, loras: list[LoraSpec] | None = None) -> str:
        """Run a full generation and return the resulting image URL.

        :param prompt: Positive prompt text.
        :param loras: LoRAs to chain into the workflow.
        :returns: The ``/view`` URL of the first generated image.
        :raises GenerationClientError: If any step fails or polling times out.
        """
        prompt_id = self.submit_prompt(build_workflow(prompt, loras))
        outputs = self.wait_for_outputs(prompt_id)
        return self.image_url(outputs)

    def submit_prompt(self, workflow: dict[str, Any]) -> str:
        """Queue a workflow for execution.

        :param workflow: Workflow graph in API format.
        :returns: The prompt ID assigned by ComfyUI.
        :raises GenerationClientError: If the server rejects the workflow.
        """
        try:
            response = requests.post(
                f"{self.base_url}/prompt",
                json={"prompt": workflow},
                timeout=REQUEST_TIMEOUT,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            logger.error(f"ComfyUI prompt submission failed: status={e.response.status_code}")
            raise GenerationClientError("ComfyUI API returnerade ett fel") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"ComfyUI network error: {e}")
            raise GenerationClientError("ComfyUI API är inte tillgänglig") from e
        except ValueError as e:
            raise GenerationClientError("Ogiltigt svar från ComfyUI API") from e

        prompt_id = data.get("prompt_id") if isinstance(data, dict) else None
        if not prompt_id:
            logger.error("ComfyUI response missing prompt_id")
            raise GenerationClientError("Ogiltigt svar från ComfyUI API")

        logger.info(f"ComfyUI prompt queued: prompt_id={prompt_id}")
        return str(prompt_id)

    def wait_for_outputs(self, prompt_id: str) -> dict[str, Any]:
        """Poll the history endpoint until the prompt has outputs.

        Failed checks are retried until the attempt budget runs out. A non-2xx
        history reply counts as not complete yet.

        :param prompt_id: The prompt ID returned by submit_prompt.
        :returns: The ``outputs`` mapping of the finished prompt.
        :raises GenerationClientError: 502 if the server stays unreachable, 504 on timeout.
        """
        last_error: Exception | None = None

        for attempt in range(1, self.poll_attempts + 1):
            if attempt > 1:
                time.sleep(self.poll_interval)

            try:
                response = requests.get(
                    f"{self.base_url}/history/{prompt_id}",
                    timeout=REQUEST_TIMEOUT,
                )
                if not response.ok:
                    last_error = None
                    logger.debug(
                        f"ComfyUI history returned {response.status_code} on attempt {attempt}"
                    )
                    continue
                history = response.json()
            except (requests.exceptions.RequestException, ValueError) as e:
                logger.warning(f"ComfyUI polling error on attempt {attempt}: {e}")
                last_error = e
                continue

            last_error = None
            entry = history.get(prompt_id) if isinstance(history, dict) else None
            outputs = (entry or {}).get("outputs")
            if outputs:
                logger.info(f"ComfyUI generation complete: prompt_id={prompt_id}")
                return outputs

            logger.debug(
                f"ComfyUI polling attempt {attempt}/{self.poll_attempts} - not complete yet"
            )

        if last_error is not None:
            raise GenerationClientError("ComfyUI API är inte tillgänglig") from last_error

        logger.error(f"ComfyUI generation timed out after {self.poll_attempts} attempts")
        raise GenerationClientError(
            "ComfyUI-generering tog för lång tid",
            status_code=HTTPStatus.GATEWAY_TIMEOUT,
        )

    def image_url(self, outputs: dict[str, Any]) -> str:
        """Build the view URL for the first image in a prompt's outputs.

        :param outputs: The outputs mapping from the history endpoint.
        :returns: URL of the image on the ComfyUI server.
        :raises GenerationClientError: If no output node produced an image.
        """
        for node_output in outputs.values():
            images = node_output.get("images") if isinstance(node_output, dict) else None
            if not images:
                continue

            image = images[0]
            if not isinstance(image, dict) or not image.get("filename"):
                continue
            params = {"filename": image["filename"], "type": image.get("type") or "output"}
            if image.get("subfolder"):
                params["subfolder"] = image["subfolder"]
            return f"{self.base_url}/view?{urlencode(params)}"

        logger.error("No images found in ComfyUI outputs")
        raise GenerationClientError("Ingen bild genererades av ComfyUI")

    def list_loras(self) -> list[str]:
        """List the LoRA files installed on the ComfyUI server.

        :returns: LoRA file names.
        :raises GenerationClientError: If the server cannot be queried.
        """
        try:
            response = requests.get(f"{self.base_url}/object_info", timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            object_info = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Failed to fetch ComfyUI object info: {e}")
            raise GenerationClientError("ComfyUI API är inte tillgänglig") from e

        for node_name in _LORA_LOADER_NODES:
            required = ((object_info.get(node_name) or {}).get("input") or {}).get("required")
            if not required:
                continue
            lora_input = required.get("lora_name")
            if isinstance(lora_input, list) and lora_input and isinstance(lora_input[0], list):
                return [str(name) for name in lora_input[0]]
            return []

        return []
