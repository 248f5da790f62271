from decay_event import policy_for

KEY_HINT = "Keys: 1 2 3 modes   Space new decay   Up Down bias   P pause   N step   H help"
CLAIM = "Claim being tested: \"the neutrino spins opposite the electron\""


def signed(n):
    return "+1" if n > 0 else "-1"


def hud_lines(state, readings):
    """Top panel text: mode, keys, the claim and what this frame says about it."""
    policy = policy_for(state.mode)
    lines = [
        policy.title + ("   [PAUSED]" if state.paused else ""),
        KEY_HINT,
        "",
        CLAIM,
    ]
    if policy.force_spin_opposition:
        lines.append("Result: ALWAYS looks true here (by design). This mode is the oversimplified story.")
    else:
        verdict = "looks true" if readings.claim_looks_true else "does NOT look true"
        lines.append(f"Result in this frame: {verdict} (spin dot = {readings.spin_dot:.2f})")
    lines.append(policy.seeing)
    return lines


def help_lines(state, event, readings):
    """Bottom panel: numeric readouts that only make sense for the current mode."""
    policy = policy_for(state.mode)
    lines = [f"left bias: {state.left_hand_bias:.2f}   proton spin sign: {signed(event.proton_spin_sign)}"]

    if policy.force_spin_opposition:
        lines.append("Mode 1 note: this forces opposite spins, so it cannot teach helicity "
                     "or why the shortcut fails.")
    else:
        lines.append(f"electron helicity: {signed(readings.electron_helicity)}"
                     f"   anti nu helicity: {signed(readings.antineutrino_helicity)}")
        lines.append("Helicity = sign(spin dot momentum). Flip motion and helicity can change.")

    if policy.show_swirl:
        L = event.orbital_deficit
        if L == 0:
            lines.append("Conservation: spins alone balance (L_needed = 0).")
        else:
            lines.append("Conservation: spins do NOT balance. Extra angular momentum must come "
                         f"from motion (L_needed = {L}).")
    else:
        lines.append("Tip: switch to Mode 3 to see why spin-only balancing is not generally sufficient.")
    return lines
