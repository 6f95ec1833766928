import gzip

import pytest

from ableton_inspector.parser import parse_xml


SAMPLE_SET_XML = """<?xml version="1.0" encoding="UTF-8"?>
<Ableton MajorVersion="5" MinorVersion="12.0_12049" Creator="Ableton Live 12.0">
  <LiveSet>
    <Tracks>
      <AudioTrack Id="8">
        <Name>
          <EffectiveName Value="Drums" />
          <UserName Value="" />
          <Annotation Value="" />
        </Name>
        <Color Value="14" />
        <DeviceChain>
          <Devices>
            <PluginDevice Id="0">
              <IsExpanded Value="true" />
              <PluginDesc>
                <VstPluginInfo Id="0">
                  <PlugName Value="Serum" />
                  <Manufacturer Value="Xfer Records" />
                </VstPluginInfo>
              </PluginDesc>
            </PluginDevice>
          </Devices>
          <AudioClip Id="0">
            <SampleRef>
              <FileRef>
                <RelativePath Value="Samples/kick.wav" />
                <Path Value="/Users/me/Splice/sounds/packs/DrumKitX/drums/kick.wav" />
                <OriginalFileSize Value="123456" />
              </FileRef>
            </SampleRef>
            <TimeSignature>
              <TimeSignatures>
                <RemoteableTimeSignature Id="0">
                  <Numerator Value="4" />
                  <Denominator Value="4" />
                  <Time Value="0" />
                </RemoteableTimeSignature>
              </TimeSignatures>
            </TimeSignature>
            <ScaleInformation>
              <Root Value="9" />
              <Name Value="1" />
            </ScaleInformation>
          </AudioClip>
          <AudioClip Id="1">
            <SampleRef>
              <FileRef>
                <RelativePath Value="Samples/snare.aif" />
                <Path Value="/Users/me/Music/Samples/snare.aif" />
                <OriginalFileSize Value="0" />
              </FileRef>
            </SampleRef>
          </AudioClip>
        </DeviceChain>
      </AudioTrack>
      <MidiTrack Id="12">
        <Name>
          <EffectiveName Value="Bass" />
          <UserName Value="Bass" />
          <Annotation Value="sub" />
        </Name>
        <Color Value="3" />
        <DeviceChain>
          <Devices>
            <InstrumentGroupDevice Id="1">
              <UserName Value="" />
            </InstrumentGroupDevice>
          </Devices>
          <MidiClip Id="2">
            <TimeSignature>
              <TimeSignatures>
                <RemoteableTimeSignature Id="0">
                  <Numerator Value="7" />
                  <Denominator Value="8" />
                  <Time Value="32" />
                </RemoteableTimeSignature>
              </TimeSignatures>
            </TimeSignature>
            <ScaleInformation>
              <Root Value="9" />
              <Name Value="1" />
            </ScaleInformation>
          </MidiClip>
        </DeviceChain>
      </MidiTrack>
      <ReturnTrack Id="2">
        <Name>
          <EffectiveName Value="A-Reverb" />
          <UserName Value="" />
          <Annotation Value="" />
        </Name>
        <Color Value="7" />
        <DeviceChain>
          <FileRef>
            <RelativePath Value="" />
            <Path Value="/Applications/Live.app/Contents/App-Resources/Core Library/Devices/Audio Effects/Reverb.adv" />
            <OriginalFileSize Value="0" />
          </FileRef>
          <FileRef>
            <Path Value="Tuner" />
            <OriginalFileSize Value="0" />
          </FileRef>
        </DeviceChain>
      </ReturnTrack>
    </Tracks>
    <MainTrack>
      <AutomationEnvelopes>
        <Envelopes>
          <AutomationEnvelope Id="0">
            <EnvelopeTarget>
              <PointeeId Value="8" />
            </EnvelopeTarget>
            <Automation>
              <Events>
                <FloatEvent Id="1" Time="-63072000" Value="124" />
                <FloatEvent Id="2" Time="16" Value="128.456" />
              </Events>
            </Automation>
          </AutomationEnvelope>
        </Envelopes>
      </AutomationEnvelopes>
    </MainTrack>
    <PreHearTrack>
      <Name>
        <EffectiveName Value="Master" />
        <UserName Value="" />
        <Annotation Value="" />
      </Name>
      <Color Value="0" />
    </PreHearTrack>
    <Locators>
      <Locators>
        <Locator Id="1">
          <Time Value="32" />
          <Name Value="Drop" />
          <Annotation Value="" />
          <IsSongStart Value="false" />
        </Locator>
        <Locator Id="0">
          <Time Value="0" />
          <Name Value="Intro" />
          <Annotation Value="start here" />
          <IsSongStart Value="true" />
        </Locator>
        <Locator Id="2">
          <Time Value="64" />
        </Locator>
      </Locators>
    </Locators>
  </LiveSet>
</Ableton>
"""


def wrap_live_set(body: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<Ableton MajorVersion="5" MinorVersion="12.0_12049">'
        f'<LiveSet>{body}</LiveSet>'
        '</Ableton>'
    )


@pytest.fixture
def sample_set_xml():
    return SAMPLE_SET_XML


@pytest.fixture
def sample_set_als():
    """The sample set as gzipped .als bytes."""
    return gzip.compress(SAMPLE_SET_XML.encode("utf-8"))


@pytest.fixture
def live_set():
    """Parse a LiveSet body into a document tree."""
    def build(body: str):
        return parse_xml(wrap_live_set(body))
    return build
